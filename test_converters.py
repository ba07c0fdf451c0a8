import math
import unittest
from core.config import DEFAULT_CONFIG, load_config
from core.converters import convert_length_unit, convert_to_amps, parse_quantity
from core.grounding import earth_conductor
from core.models import CircuitType, ConductorMaterial, Length, LengthUnit, Standard
from standards.tables import TableLookupError


class TestConverters(unittest.TestCase):

    def test_amps_pass_through(self):
        self.assertEqual(convert_to_amps(20, "A", 230, CircuitType.SINGLE_PHASE), 20)

    def test_power_to_amps(self):
        # 10 kW, 400 V, 3 ph, PF 1 -> 14.43 A
        self.assertAlmostEqual(convert_to_amps(10, "kW", 400, CircuitType.THREE_PHASE), 14.434, places=3)
        self.assertAlmostEqual(convert_to_amps(1000, "W", 200, CircuitType.SINGLE_PHASE, 0.5), 10.0)
        self.assertAlmostEqual(convert_to_amps(1, "HP", 746, CircuitType.SINGLE_PHASE), 1.0)
        # Apparent power ignores PF
        self.assertAlmostEqual(convert_to_amps(50, "KVA", 480, CircuitType.THREE_PHASE, 0.8),
                               50000 / (480 * math.sqrt(3)))

    def test_unknown_load_unit(self):
        with self.assertRaises(ValueError):
            convert_to_amps(10, "BTU", 230, CircuitType.SINGLE_PHASE)

    def test_length_units(self):
        self.assertEqual(convert_length_unit(100, "pies"), Length(100, LengthUnit.FEET))
        self.assertEqual(convert_length_unit(50, "Metros"), Length(50, LengthUnit.METERS))
        self.assertAlmostEqual(convert_length_unit(100, "yd").value, 91.44)
        with self.assertRaises(ValueError):
            convert_length_unit(10, "km")

    def test_length_to(self):
        self.assertAlmostEqual(Length.meters(1).to(LengthUnit.FEET).value, 3.28084)
        self.assertEqual(str(Length.feet(100)), "100 ft")

    def test_parse_quantity(self):
        self.assertEqual(parse_quantity("50 m", "ft"), (50.0, "m"))
        self.assertEqual(parse_quantity("30", "ft"), (30.0, "ft"))
        self.assertEqual(parse_quantity("12,5kW", "A"), (12.5, "kW"))
        with self.assertRaises(ValueError):
            parse_quantity("mucho", "A")


class TestEarthConductor(unittest.TestCase):

    def test_iec_table_54_2(self):
        cases = {"1.5": "2.5", "10": "10", "16": "16", "25": "16", "35": "16",
                 "95": "50", "240": "120", "630": "400"}
        for phase, pe in cases.items():
            earth = earth_conductor(Standard.IEC, phase, 10)
            self.assertEqual(earth.size, pe, f"phase {phase}")
        self.assertEqual(earth_conductor(Standard.IEC, "70", 150).formatted_size, "35 mm²")

    def test_nec_250_122(self):
        # 16A * 1.25 = 20A OCPD -> 12 AWG
        earth = earth_conductor(Standard.NEC, "12", 16)
        self.assertEqual(earth.size, "12")
        self.assertIn("20A OCPD", earth.rule)

        earth = earth_conductor(Standard.NEC, "3/0", 180, ConductorMaterial.ALUMINUM)
        self.assertEqual(earth.size, "2")  # 225A OCPD, aluminum column

        earth = earth_conductor(Standard.NEC, "1000", 2000)
        self.assertEqual(earth.formatted_size, "350 kcmil")

    def test_nec_beyond_table(self):
        earth = earth_conductor(Standard.NEC, "1000", 5000)
        self.assertEqual(earth.size, "800")
        self.assertIn("exceeds table", earth.rule)

    def test_unknown_phase_size(self):
        with self.assertRaises(TableLookupError):
            earth_conductor(Standard.IEC, "7", 10)


class TestConfig(unittest.TestCase):

    def test_defaults(self):
        config = load_config()
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertIsNot(config, DEFAULT_CONFIG)
        self.assertEqual(config["max_voltage_drop_percent"], 3.0)

    def test_overrides(self):
        self.assertEqual(load_config({"alternative_sizes": 5})["alternative_sizes"], 5)
        with self.assertRaises(KeyError):
            load_config({"max_drop": 4})


if __name__ == '__main__':
    unittest.main()
