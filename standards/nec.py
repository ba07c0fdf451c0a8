import math
from typing import List, Mapping, Optional, Tuple

from core.calculator import StandardRules
from core.config import NEC_OCPD_FACTOR
from core.models import (ConductorMaterial, EarthConductor, InstallationMethod,
                         InsulationRating, Standard)
from standards.nec_tables import (AMPACITY_REFERENCE, GROUPING_FACTORS, GROUPING_FACTORS_EXTENDED,
                                  NEC_250_122, NEC_SIZES, NEC_TABLES, NEC_TEMP_MAX_C, NEC_TEMP_MIN_C,
                                  RESISTANCE_REFERENCE, TEMP_CORRECTION_FACTORS)
from standards.tables import ConductorTable, TableLookupError, step_lookup


class NECRules(StandardRules):
    standard = Standard.NEC
    sizes = NEC_SIZES

    # Sizes from 250 up are kcmil, the rest AWG
    KCMIL_FROM = "250"

    @property
    def tables(self) -> Mapping[ConductorMaterial, ConductorTable]:
        return NEC_TABLES

    @property
    def temperature_domain(self) -> Tuple[float, float]:
        return NEC_TEMP_MIN_C, NEC_TEMP_MAX_C

    def temperature_factor(self, ambient_c: float, rating: InsulationRating) -> float:
        # NEC 310.15(B)(1)
        if ambient_c < NEC_TEMP_MIN_C:
            raise TableLookupError(f"Ambient {ambient_c:g}C is below NEC 310.15(B)(1) range")
        for upper, factors in TEMP_CORRECTION_FACTORS:
            if ambient_c <= upper:
                if rating not in factors:
                    raise TableLookupError(f"NEC 310.15(B)(1) has no {rating.value}C column")
                return factors[rating]
        raise TableLookupError(f"Ambient {ambient_c:g}C exceeds NEC 310.15(B)(1) range")

    def grouping_factor(self, conductor_count: int,
                        installation_method: Optional[InstallationMethod],
                        extended: bool = False) -> float:
        # NEC 310.15(C)(1) counts current-carrying conductors, not circuits
        buckets = GROUPING_FACTORS_EXTENDED if extended else GROUPING_FACTORS
        return step_lookup(buckets, conductor_count, 1, "NEC 310.15(C)(1) conductor count")

    def derating_reference(self, installation_method: Optional[InstallationMethod]) -> str:
        return "NEC 310.15(B)(1), NEC 310.15(C)(1)"

    @property
    def voltage_drop_reference(self) -> str:
        return f"{RESISTANCE_REFERENCE} / NEC 210.19(A) Informational Note No. 4"

    def citations(self, installation_method: Optional[InstallationMethod]) -> List[str]:
        return [
            AMPACITY_REFERENCE,
            "NEC 310.15(B)(1) Ambient Temperature Correction",
            "NEC 310.15(C)(1) Adjustment for More Than Three Conductors",
            RESISTANCE_REFERENCE,
            "NEC 210.19(A) Informational Note No. 4 (3% Voltage Drop)",
            "NEC Table 250.122",
        ]

    def earth_conductor(self, phase_size: str, current: float,
                        material: ConductorMaterial,
                        ocpd_factor: float = NEC_OCPD_FACTOR) -> EarthConductor:
        # NEC 250.122: size follows the OCPD, estimated from the load current
        ocpd = math.ceil(current * ocpd_factor)
        column = 1 if material is ConductorMaterial.COPPER else 2
        row = next((r for r in NEC_250_122 if r[0] >= ocpd), NEC_250_122[-1])
        size = row[column]
        rule = f"Based on {ocpd}A OCPD ({ocpd_factor * 100:g}% of {current:g}A)"
        if row is NEC_250_122[-1] and ocpd > row[0]:
            rule += f"; OCPD exceeds table, largest row ({row[0]}A) used"
        return EarthConductor(size=size, formatted_size=self.format_size(size),
                              rule=rule, standard_reference="NEC Table 250.122")

    def format_size(self, size: str) -> str:
        if "/" not in size and int(size) >= int(self.KCMIL_FROM):
            return f"{size} kcmil"
        return f"{size} AWG"
