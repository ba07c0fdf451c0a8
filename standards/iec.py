import math
from typing import List, Mapping, Optional, Tuple

from core.calculator import StandardRules
from core.models import (ConductorMaterial, EarthConductor, InstallationMethod,
                         InsulationRating, Standard)
from standards.iec_tables import (AMPACITY_REFERENCE, GROUPING_FACTORS, IEC_SIZES, IEC_TABLES,
                                  IEC_TEMP_MAX_C, IEC_TEMP_MIN_C, PE_MIN_PROTECTED_MM2,
                                  REFERENCE_METHOD, TEMP_CORRECTION_FACTORS,
                                  VOLTAGE_DROP_REFERENCE)
from standards.tables import ConductorTable, TableLookupError

CONDUCTORS_PER_CIRCUIT = 3


class IECRules(StandardRules):
    standard = Standard.IEC
    sizes = IEC_SIZES

    @property
    def tables(self) -> Mapping[ConductorMaterial, ConductorTable]:
        return IEC_TABLES

    @property
    def temperature_domain(self) -> Tuple[float, float]:
        return IEC_TEMP_MIN_C, IEC_TEMP_MAX_C

    def temperature_factor(self, ambient_c: float, rating: InsulationRating) -> float:
        # IEC 60364-5-52 Table B.52.14
        if ambient_c < IEC_TEMP_MIN_C:
            raise TableLookupError(f"Ambient {ambient_c:g}C is below Table B.52.14 range")
        for upper, factors in TEMP_CORRECTION_FACTORS:
            if ambient_c <= upper:
                if rating not in factors:
                    raise TableLookupError(f"Table B.52.14 has no {rating.value}C column")
                return factors[rating]
        raise TableLookupError(f"Ambient {ambient_c:g}C exceeds Table B.52.14 range")

    @staticmethod
    def reference_method(installation_method: Optional[InstallationMethod]) -> str:
        if installation_method is None:
            return REFERENCE_METHOD[InstallationMethod.SINGLE_CONDUIT]
        return REFERENCE_METHOD[installation_method]

    @staticmethod
    def circuits(conductor_count: int) -> int:
        # Assumes three loaded conductors per circuit; a partial circuit counts as one
        return math.ceil(conductor_count / CONDUCTORS_PER_CIRCUIT)

    def grouping_factor(self, conductor_count: int,
                        installation_method: Optional[InstallationMethod],
                        extended: bool = False) -> float:
        # Table B.52.17 is tabulated per circuit; there is no extended table
        if conductor_count < 1:
            raise TableLookupError(f"Conductor count {conductor_count} is below Table B.52.17 range")
        n = self.circuits(conductor_count)
        method = self.reference_method(installation_method)
        for circuits, factors in GROUPING_FACTORS:
            if n <= circuits:
                return factors[method]
        raise TableLookupError(
            f"{n} circuits exceeds Table B.52.17 range ({GROUPING_FACTORS[-1][0]})"
        )

    def derating_reference(self, installation_method: Optional[InstallationMethod]) -> str:
        method = self.reference_method(installation_method)
        return f"IEC 60364-5-52 Table B.52.14, Table B.52.17 (Method {method})"

    @property
    def voltage_drop_reference(self) -> str:
        return VOLTAGE_DROP_REFERENCE

    def citations(self, installation_method: Optional[InstallationMethod]) -> List[str]:
        method = self.reference_method(installation_method)
        return [
            AMPACITY_REFERENCE,
            "IEC 60364-5-52 Table B.52.14 Ambient Temperature Correction",
            f"IEC 60364-5-52 Table B.52.17 Grouping (Reference Method {method})",
            VOLTAGE_DROP_REFERENCE,
            "IEC 60364-5-54 Table 54.2",
        ]

    def earth_conductor(self, phase_size: str, current: float,
                        material: ConductorMaterial) -> EarthConductor:
        # IEC 60364-5-54 Table 54.2, PE of the same material as the phase
        s_phase = float(phase_size)
        if s_phase <= 16:
            s_pe = s_phase
            rule = "PE = Phase conductor size (S <= 16 mm2)"
        elif s_phase <= 35:
            s_pe = 16.0
            rule = "PE = 16 mm2 (16 < S <= 35 mm2)"
        else:
            s_pe = s_phase / 2
            rule = "PE = S / 2 (S > 35 mm2)"

        if s_pe < PE_MIN_PROTECTED_MM2:
            s_pe = PE_MIN_PROTECTED_MM2
            rule += f" (minimum {PE_MIN_PROTECTED_MM2:g} mm2 for protected PE)"

        size = next((s for s in IEC_SIZES if float(s) >= s_pe), IEC_SIZES[-1])
        return EarthConductor(size=size, formatted_size=self.format_size(size),
                              rule=rule, standard_reference="IEC 60364-5-54 Table 54.2")

    def format_size(self, size: str) -> str:
        return f"{size} mm²"
