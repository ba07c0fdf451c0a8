import unittest
from core.derating import DeratingComposer, derated_ampacity
from core.models import InstallationMethod, InsulationRating, Standard
from standards.iec import IECRules
from standards.tables import TableLookupError

T60 = InsulationRating.TEMP_60
T70 = InsulationRating.TEMP_70
T75 = InsulationRating.TEMP_75
T90 = InsulationRating.TEMP_90


class TestNECDerating(unittest.TestCase):

    def test_temp_and_grouping_combined(self):
        print("\n--- TEST: Derating NEC 40C, 6 conductores, 75C ---")
        d = DeratingComposer.compose(Standard.NEC, 40, T75, 6)
        print(f"Temp: {d.temperature_factor} | Agrup: {d.grouping_factor} | Total: {d.total_factor:.4f}")
        self.assertAlmostEqual(d.temperature_factor, 0.88)
        self.assertEqual(d.grouping_factor, 0.80)
        self.assertAlmostEqual(d.total_factor, 0.704)
        self.assertIn("310.15(B)(1)", d.standard_reference)
        self.assertEqual(d.warnings, ())

    def test_grouping_steps(self):
        expected = {1: 1.0, 3: 1.0, 4: 0.80, 6: 0.80, 7: 0.70, 10: 0.50,
                    20: 0.50, 21: 0.45, 31: 0.40, 40: 0.40}
        for count, factor in expected.items():
            d = DeratingComposer.compose(Standard.NEC, 30, T75, count)
            self.assertEqual(d.grouping_factor, factor, f"{count} conductors")

    def test_more_than_40_conductors(self):
        with self.assertRaises(TableLookupError):
            DeratingComposer.compose(Standard.NEC, 30, T75, 41)

        d = DeratingComposer.compose(Standard.NEC, 30, T75, 41, extended_grouping=True)
        self.assertEqual(d.grouping_factor, 0.35)

    def test_ambient_out_of_table(self):
        with self.assertRaises(TableLookupError):
            DeratingComposer.compose(Standard.NEC, 91, T90, 3)
        with self.assertRaises(TableLookupError):
            DeratingComposer.compose(Standard.NEC, -41, T75, 3)

    def test_ambient_above_insulation_rating(self):
        # 60C column is blank from 56C up
        with self.assertRaises(TableLookupError):
            DeratingComposer.compose(Standard.NEC, 60, T60, 3)
        d = DeratingComposer.compose(Standard.NEC, 60, T90, 3)
        self.assertAlmostEqual(d.temperature_factor, 0.71)

    def test_rating_column_missing(self):
        with self.assertRaises(TableLookupError):
            DeratingComposer.compose(Standard.NEC, 40, T70, 3)

    def test_severe_derating_warning(self):
        # 0.75 * 0.50 = 0.375
        d = DeratingComposer.compose(Standard.NEC, 50, T75, 20)
        self.assertAlmostEqual(d.total_factor, 0.375)
        self.assertEqual(len(d.warnings), 1)
        self.assertIn("very low", d.warnings[0])

        d = DeratingComposer.compose(Standard.NEC, 70, T75, 3)
        self.assertTrue(any("High ambient temperature" in w for w in d.warnings))

    def test_factor_bounds(self):
        for standard, rating, temps in [
            (Standard.NEC, T75, [-40, 0, 25, 30, 41, 55, 70]),
            (Standard.IEC, T70, [10, 20, 30, 45, 65]),
        ]:
            for temp in temps:
                for count in [1, 3, 5, 9, 18, 30]:
                    d = DeratingComposer.compose(standard, temp, rating, count)
                    self.assertGreater(d.total_factor, 0.0)
                    self.assertLessEqual(d.total_factor, 1.0)
                    self.assertLessEqual(derated_ampacity(100, d), 100)


class TestIECDerating(unittest.TestCase):

    def test_no_credit_below_30c(self):
        # Table B.52.14 gives 1.22 at 10C; capped at 1.0
        d = DeratingComposer.compose(Standard.IEC, 10, T70, 3)
        self.assertEqual(d.temperature_factor, 1.0)
        self.assertEqual(d.total_factor, 1.0)

    def test_temperature_column(self):
        d = DeratingComposer.compose(Standard.IEC, 40, T90, 3)
        self.assertAlmostEqual(d.temperature_factor, 0.91)
        d = DeratingComposer.compose(Standard.IEC, 40, T70, 3)
        self.assertAlmostEqual(d.temperature_factor, 0.87)

    def test_circuits_round_up(self):
        self.assertEqual(IECRules.circuits(1), 1)
        self.assertEqual(IECRules.circuits(3), 1)
        self.assertEqual(IECRules.circuits(4), 2)
        self.assertEqual(IECRules.circuits(7), 3)

    def test_grouping_by_method(self):
        d = DeratingComposer.compose(Standard.IEC, 30, T70, 4)
        self.assertEqual(d.grouping_factor, 0.80)  # 2 circuits, method A
        self.assertIn("Method A", d.standard_reference)

        d = DeratingComposer.compose(Standard.IEC, 30, T70, 4, InstallationMethod.TRAY)
        self.assertEqual(d.grouping_factor, 0.85)
        self.assertIn("Method C", d.standard_reference)

        d = DeratingComposer.compose(Standard.IEC, 30, T70, 7, InstallationMethod.FREE_AIR)
        self.assertEqual(d.grouping_factor, 0.82)

    def test_missing_method_is_conduit(self):
        a = DeratingComposer.compose(Standard.IEC, 30, T70, 9, None)
        b = DeratingComposer.compose(Standard.IEC, 30, T70, 9, InstallationMethod.SINGLE_CONDUIT)
        self.assertEqual(a.grouping_factor, b.grouping_factor)

    def test_circuit_count_between_rows(self):
        # 30 conductors -> 10 circuits -> 12 circuit row
        d = DeratingComposer.compose(Standard.IEC, 30, T70, 30, InstallationMethod.MULTI_CONDUIT)
        self.assertEqual(d.grouping_factor, 0.65)

    def test_too_many_circuits(self):
        d = DeratingComposer.compose(Standard.IEC, 30, T70, 60)
        self.assertEqual(d.grouping_factor, 0.38)
        with self.assertRaises(TableLookupError):
            DeratingComposer.compose(Standard.IEC, 30, T70, 61)

    def test_ambient_out_of_table(self):
        with self.assertRaises(TableLookupError):
            DeratingComposer.compose(Standard.IEC, 5, T70, 3)
        with self.assertRaises(TableLookupError):
            DeratingComposer.compose(Standard.IEC, 70, T70, 3)


if __name__ == '__main__':
    unittest.main()
