import math
import re
from typing import Tuple

from core.models import CircuitType, Length, LengthUnit

_QUANTITY = re.compile(r"^\s*([0-9]+(?:[.,][0-9]+)?)\s*([a-zA-Z]*)\s*$")


def parse_quantity(text: str, default_unit: str) -> Tuple[float, str]:
    """Splits '50 m' / '10kW' / '30' into (value, unit)."""
    match = _QUANTITY.match(text)
    if not match:
        raise ValueError(f"Cannot read quantity '{text}'")
    value = float(match.group(1).replace(",", "."))
    unit = match.group(2) or default_unit
    return value, unit


def convert_to_amps(val: float, unit: str, voltage: float,
                    circuit_type: CircuitType, pf: float = 1.0) -> float:
    """Converts a load given as current, power or apparent power to line current (A)."""
    unit = unit.strip().upper()
    if unit == "A":
        return val

    factor = math.sqrt(3) if circuit_type is CircuitType.THREE_PHASE else 1.0

    # Real power
    if unit == "W":
        return val / (voltage * factor * pf)
    if unit == "KW":
        return val * 1000.0 / (voltage * factor * pf)
    if unit == "MW":
        return val * 1000000.0 / (voltage * factor * pf)
    if unit == "HP":
        return val * 746.0 / (voltage * factor * pf)

    # Apparent power
    if unit == "VA":
        return val / (voltage * factor)
    if unit == "KVA":
        return val * 1000.0 / (voltage * factor)
    if unit == "MVA":
        return val * 1000000.0 / (voltage * factor)

    raise ValueError(f"Unknown load unit '{unit}'")


def convert_length_unit(val: float, unit: str) -> Length:
    """Returns a tagged Length; yards are folded into metres."""
    unit = unit.strip().lower()
    if unit in ["m", "mts", "metros", "metro"]:
        return Length(val, LengthUnit.METERS)
    if unit in ["ft", "pies", "pie"]:
        return Length(val, LengthUnit.FEET)
    if unit in ["yd", "yarda", "yardas"]:
        return Length(val * 0.9144, LengthUnit.METERS)
    raise ValueError(f"Unknown length unit '{unit}'")
