"""Voltage drop for a tabulated conductor.

``volts = k * I * L * R / 1000`` with ``k = 2`` for single phase (out and
return) and ``k = sqrt(3)`` for three phase. ``R`` is mV/A/m under IEC (length
in metres) and ohm/1000 ft under NEC (length in feet). The length must already
be in the standard's unit; nothing is converted here.
"""
import math
from typing import List, Optional

from core.config import DANGEROUS_VOLTAGE_DROP_PERCENT, MAX_VOLTAGE_DROP_PERCENT
from core.models import (CircuitType, ConductorMaterial, Length, LengthLike, Standard,
                         VoltageDrop)
from standards.rules import rules_for


class UnitMismatchError(ValueError):
    """A length was given in a unit other than the standard's own."""


CIRCUIT_MULTIPLIERS = {
    CircuitType.SINGLE_PHASE: 2.0,
    CircuitType.THREE_PHASE: math.sqrt(3),
}


def native_length(length: LengthLike, standard: Standard) -> float:
    if isinstance(length, Length):
        if length.unit is not standard.length_unit:
            raise UnitMismatchError(
                f"{standard.value} expects length in {standard.length_unit.value}, got {length}"
            )
        return length.value
    return float(length)


class VoltageDropCalculator:

    @staticmethod
    def drop(current: float, length: LengthLike, size: str, material: ConductorMaterial,
             circuit_type: CircuitType, standard: Standard,
             system_voltage: Optional[float] = None,
             max_percent: float = MAX_VOLTAGE_DROP_PERCENT,
             dangerous_percent: float = DANGEROUS_VOLTAGE_DROP_PERCENT) -> VoltageDrop:
        length_value = native_length(length, standard)
        rules = rules_for(standard)
        rules.size_index(size)
        table = rules.table(material)
        resistance = table.row(size).resistance
        multiplier = CIRCUIT_MULTIPLIERS[circuit_type]

        volts = multiplier * current * length_value * resistance / 1000.0

        percent = None
        if system_voltage:
            percent = 100.0 * volts / system_voltage

        return VoltageDrop(
            volts=volts,
            percent=percent,
            is_violation=percent is not None and percent > max_percent,
            is_dangerous=percent is not None and percent > dangerous_percent,
            resistance=resistance,
            resistance_unit=table.resistance_unit,
            multiplier=multiplier,
            standard_reference=rules.voltage_drop_reference,
        )


def voltage_drop(current, length, size, material, circuit_type, standard,
                 system_voltage=None, max_percent=MAX_VOLTAGE_DROP_PERCENT,
                 dangerous_percent=DANGEROUS_VOLTAGE_DROP_PERCENT) -> VoltageDrop:
    return VoltageDropCalculator.drop(current, length, size, material, circuit_type,
                                      standard, system_voltage, max_percent, dangerous_percent)


def sizes_for_target_drop(current: float, length: LengthLike, material: ConductorMaterial,
                          circuit_type: CircuitType, standard: Standard,
                          system_voltage: float,
                          target_percent: float = MAX_VOLTAGE_DROP_PERCENT) -> List[str]:
    """Every tabulated size whose drop is within ``target_percent``, smallest first."""
    table = rules_for(standard).table(material)
    sizes = []
    for row in table:
        vd = VoltageDropCalculator.drop(current, length, row.size, material, circuit_type,
                                        standard, system_voltage, target_percent)
        if not vd.is_violation:
            sizes.append(row.size)
    return sizes
