"""Protective / equipment grounding conductor sizing.

NEC sizes the equipment grounding conductor from the overcurrent device
(Table 250.122); IEC sizes the protective conductor from the phase
cross-section (IEC 60364-5-54 Table 54.2).
"""
from core.models import ConductorMaterial, EarthConductor, Standard
from standards.rules import rules_for


def earth_conductor(standard: Standard, phase_size: str, current: float,
                    material: ConductorMaterial = ConductorMaterial.COPPER) -> EarthConductor:
    rules = rules_for(standard)
    rules.size_index(phase_size)
    return rules.earth_conductor(phase_size, current, material)
