from abc import ABC, abstractmethod
from typing import List, Mapping, Optional, Tuple

from standards.tables import ConductorTable, TableLookupError, find_table
from core.models import (ConductorMaterial, EarthConductor, InstallationMethod,
                         InsulationRating, Standard)


class StandardRules(ABC):
    """Everything that differs between the IEC and NEC frameworks."""

    standard: Standard
    sizes: Tuple[str, ...]

    @property
    @abstractmethod
    def tables(self) -> Mapping[ConductorMaterial, ConductorTable]:
        """Ampacity/resistance tables keyed by conductor material."""
        pass

    @property
    @abstractmethod
    def temperature_domain(self) -> Tuple[float, float]:
        """(min, max) ambient in C covered by the correction table."""
        pass

    @abstractmethod
    def temperature_factor(self, ambient_c: float, rating: InsulationRating) -> float:
        """Ambient temperature correction, as tabulated (may exceed 1.0 for cold ambients)."""
        pass

    @abstractmethod
    def grouping_factor(self, conductor_count: int,
                        installation_method: Optional[InstallationMethod],
                        extended: bool = False) -> float:
        """Adjustment factor for conductors/circuits installed together."""
        pass

    @abstractmethod
    def derating_reference(self, installation_method: Optional[InstallationMethod]) -> str:
        """Clauses behind the temperature and grouping factors."""
        pass

    @property
    @abstractmethod
    def voltage_drop_reference(self) -> str:
        pass

    @abstractmethod
    def citations(self, installation_method: Optional[InstallationMethod]) -> List[str]:
        """Literal citations for a sizing result. Returns ordered strings."""
        pass

    @abstractmethod
    def earth_conductor(self, phase_size: str, current: float,
                        material: ConductorMaterial) -> EarthConductor:
        """Minimum protective/grounding conductor for a circuit."""
        pass

    @abstractmethod
    def format_size(self, size: str) -> str:
        pass

    def table(self, material: ConductorMaterial) -> ConductorTable:
        return find_table(self.tables, self.standard, material)

    def size_index(self, size: str) -> int:
        try:
            return self.sizes.index(size)
        except ValueError:
            raise TableLookupError(
                f"Size {size} is not a {self.standard.value} conductor size"
            ) from None
