import unittest
from core.ampacity import resolve_ampacity
from core.models import CircuitType, ConductorMaterial, InsulationRating, Length, Standard
from core.voltage_drop import UnitMismatchError, sizes_for_target_drop, voltage_drop
from standards.rules import rules_for
from standards.tables import TableLookupError

CU = ConductorMaterial.COPPER
AL = ConductorMaterial.ALUMINUM
SP = CircuitType.SINGLE_PHASE
TP = CircuitType.THREE_PHASE


class TestVoltageDrop(unittest.TestCase):
    def test_iec_single_phase(self):
        # 2 * 30A * 50m * 3.08 mV/A/m / 1000 = 9.24 V
        vd = voltage_drop(30, Length.meters(50), "6", CU, SP, Standard.IEC, 230)
        self.assertAlmostEqual(vd.volts, 9.24, places=6)
        self.assertAlmostEqual(vd.percent, 9.24 / 230 * 100, places=6)
        self.assertTrue(vd.is_violation)
        self.assertFalse(vd.is_dangerous)
        self.assertEqual(vd.resistance_unit, "mV/A/m")
        self.assertEqual(vd.multiplier, 2.0)

    def test_iec_three_phase(self):
        # sqrt(3) * 50A * 100m * 1.15 / 1000 = 9.959 V
        vd = voltage_drop(50, Length.meters(100), "16", CU, TP, Standard.IEC, 400)
        self.assertAlmostEqual(vd.volts, 9.96, places=2)
        self.assertLess(vd.percent, 3.0)
        self.assertFalse(vd.is_violation)

    def test_nec_single_phase(self):
        # 2 * 20A * 100ft * 1.98 ohm/kft / 1000 = 7.92 V
        vd = voltage_drop(20, Length.feet(100), "12", CU, SP, Standard.NEC, 120)
        self.assertAlmostEqual(vd.volts, 7.92, places=6)
        self.assertAlmostEqual(vd.percent, 6.6, places=6)
        self.assertEqual(vd.resistance_unit, "ohm/kft")
        self.assertIn("NEC Chapter 9 Table 8", vd.standard_reference)

    def test_limit_is_inclusive(self):
        vd = voltage_drop(16, Length.meters(20), "2.5", CU, SP, Standard.IEC, 230)
        at_limit = voltage_drop(16, Length.meters(20), "2.5", CU, SP, Standard.IEC, 230,
                                max_percent=vd.percent)
        self.assertFalse(at_limit.is_violation)

        below_limit = voltage_drop(16, Length.meters(20), "2.5", CU, SP, Standard.IEC, 230,
                                   max_percent=vd.percent - 0.01)
        self.assertTrue(below_limit.is_violation)

    def test_drop_exactly_at_limit(self):
        # 2 * 30A * 50m * 1.83 mV/A/m / 1000 = 5.49 V, 3.0% of 183 V
        vd = voltage_drop(30, Length.meters(50), "10", CU, SP, Standard.IEC, 183,
                          max_percent=3.0)
        self.assertEqual(vd.percent, 3.0)
        self.assertFalse(vd.is_violation)

    def test_dangerous_drop(self):
        vd = voltage_drop(20, Length.meters(200), "1.5", CU, SP, Standard.IEC, 230)
        self.assertGreater(vd.percent, 10.0)
        self.assertTrue(vd.is_dangerous)

    def test_no_voltage_no_percent(self):
        vd = voltage_drop(30, Length.meters(50), "6", CU, SP, Standard.IEC)
        self.assertIsNone(vd.percent)
        self.assertFalse(vd.is_violation)
        self.assertAlmostEqual(vd.volts, 9.24, places=6)

    def test_percent_unchanged_when_voltage_and_current_double(self):
        a = voltage_drop(10, Length.meters(40), "4", CU, TP, Standard.IEC, 400)
        b = voltage_drop(20, Length.meters(40), "4", CU, TP, Standard.IEC, 800)
        self.assertAlmostEqual(a.percent, b.percent, places=9)

    def test_bare_number_is_native_unit(self):
        tagged = voltage_drop(20, Length.feet(100), "12", CU, SP, Standard.NEC, 120)
        bare = voltage_drop(20, 100, "12", CU, SP, Standard.NEC, 120)
        self.assertEqual(tagged.volts, bare.volts)

    def test_wrong_length_unit(self):
        with self.assertRaises(UnitMismatchError):
            voltage_drop(20, Length.meters(30), "12", CU, SP, Standard.NEC, 120)
        with self.assertRaises(UnitMismatchError):
            voltage_drop(20, Length.feet(100), "4", CU, SP, Standard.IEC, 230)

    def test_unknown_size(self):
        with self.assertRaises(TableLookupError):
            voltage_drop(20, Length.meters(30), "7", CU, SP, Standard.IEC, 230)
        with self.assertRaises(TableLookupError):
            voltage_drop(20, Length.feet(30), "14", AL, SP, Standard.NEC, 120)

    def test_dangerous_threshold_argument(self):
        vd = voltage_drop(30, Length.meters(50), "6", CU, SP, Standard.IEC, 230,
                          dangerous_percent=4.0)
        self.assertTrue(vd.is_dangerous)

    def test_sizes_for_target_drop(self):
        # R <= 3% * 230 * 1000 / (2 * 30 * 50) = 2.3 mV/A/m -> 10 mm2 and up
        sizes = sizes_for_target_drop(30, Length.meters(50), CU, SP, Standard.IEC, 230)
        self.assertEqual(sizes[0], "10")
        self.assertEqual(sizes[-1], "630")
        self.assertNotIn("6", sizes)


class TestAmpacity(unittest.TestCase):
    def test_nec_14_awg_copper_60c(self):
        lookup = resolve_ampacity(Standard.NEC, CU, InsulationRating.TEMP_60, "14")
        self.assertEqual(lookup.base_ampacity, 15)
        self.assertEqual(lookup.resistance, 3.14)
        self.assertEqual(lookup.standard_reference, "NEC Table 310.15(B)(16)")

    def test_nec_kcmil(self):
        lookup = resolve_ampacity(Standard.NEC, CU, InsulationRating.TEMP_75, "500")
        self.assertEqual(lookup.base_ampacity, 380)

    def test_iec_columns(self):
        self.assertEqual(resolve_ampacity(Standard.IEC, CU, InsulationRating.TEMP_70, "6").base_ampacity, 40)
        self.assertEqual(resolve_ampacity(Standard.IEC, CU, InsulationRating.TEMP_90, "6").base_ampacity, 51)
        self.assertEqual(resolve_ampacity(Standard.IEC, AL, InsulationRating.TEMP_70, "16").base_ampacity, 53)

    def test_rating_not_tabulated(self):
        # No interpolation between insulation columns
        with self.assertRaises(TableLookupError):
            resolve_ampacity(Standard.NEC, CU, InsulationRating.TEMP_70, "12")
        with self.assertRaises(TableLookupError):
            resolve_ampacity(Standard.IEC, CU, InsulationRating.TEMP_75, "6")

    def test_size_not_tabulated(self):
        with self.assertRaises(TableLookupError):
            resolve_ampacity(Standard.NEC, AL, InsulationRating.TEMP_75, "14")
        with self.assertRaises(TableLookupError):
            resolve_ampacity(Standard.IEC, AL, InsulationRating.TEMP_70, "1.5")
        with self.assertRaises(TableLookupError):
            resolve_ampacity(Standard.IEC, CU, InsulationRating.TEMP_70, "1/0")

    def test_ampacity_grows_with_size(self):
        for standard, rating in [(Standard.IEC, InsulationRating.TEMP_70),
                                 (Standard.NEC, InsulationRating.TEMP_75)]:
            table = rules_for(standard).table(CU)
            amps = [row.ampacity[rating] for row in table]
            self.assertEqual(amps, sorted(amps))


if __name__ == '__main__':
    unittest.main()
