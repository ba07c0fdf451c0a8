from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, List, Tuple, Union

FEET_PER_METER = 3.28084


class Standard(Enum):
    IEC = "IEC"
    NEC = "NEC"

    @property
    def length_unit(self) -> "LengthUnit":
        return LengthUnit.METERS if self is Standard.IEC else LengthUnit.FEET

    @property
    def default_insulation(self) -> "InsulationRating":
        # IEC tables are tabulated for 70C PVC, NEC for 75C terminals
        return InsulationRating.TEMP_70 if self is Standard.IEC else InsulationRating.TEMP_75


class ConductorMaterial(Enum):
    COPPER = "Copper"
    ALUMINUM = "Aluminum"


class InstallationMethod(Enum):
    SINGLE_CONDUIT = "SingleConduit"
    MULTI_CONDUIT = "MultiConduit"
    TRAY = "Tray"
    DIRECT_BURIED = "DirectBuried"
    FREE_AIR = "FreeAir"


class CircuitType(Enum):
    # DC circuits are sized as single phase (out and return)
    SINGLE_PHASE = "SinglePhase"
    THREE_PHASE = "ThreePhase"


class InsulationRating(Enum):
    TEMP_60 = 60
    TEMP_70 = 70
    TEMP_75 = 75
    TEMP_90 = 90


class LengthUnit(Enum):
    METERS = "m"
    FEET = "ft"


@dataclass(frozen=True)
class Length:
    value: float
    unit: LengthUnit

    @classmethod
    def meters(cls, value: float) -> "Length":
        return cls(float(value), LengthUnit.METERS)

    @classmethod
    def feet(cls, value: float) -> "Length":
        return cls(float(value), LengthUnit.FEET)

    def to(self, unit: LengthUnit) -> "Length":
        if unit is self.unit:
            return self
        if unit is LengthUnit.FEET:
            return Length(self.value * FEET_PER_METER, unit)
        return Length(self.value / FEET_PER_METER, unit)

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit.value}"


@dataclass(frozen=True)
class SizeTableEntry:
    size: str
    base_ampacity: float
    resistance: float
    temperature_rating: InsulationRating


@dataclass(frozen=True)
class AmpacityLookup:
    size: str
    base_ampacity: float
    resistance: float
    resistance_unit: str
    standard_reference: str


@dataclass(frozen=True)
class DeratingFactor:
    temperature_factor: float
    grouping_factor: float
    total_factor: float
    standard_reference: str
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class VoltageDrop:
    volts: float
    percent: Optional[float]  # None when no system voltage was given
    is_violation: bool
    is_dangerous: bool
    resistance: float
    resistance_unit: str
    multiplier: float
    standard_reference: str


@dataclass(frozen=True)
class CableSizingInput:
    current: float
    length: Length
    system_voltage: float
    material: ConductorMaterial = ConductorMaterial.COPPER
    installation_method: InstallationMethod = InstallationMethod.SINGLE_CONDUIT
    circuit_type: CircuitType = CircuitType.SINGLE_PHASE
    ambient_temperature: float = 30.0
    conductor_count: int = 3
    standard: Standard = Standard.IEC
    insulation_rating: Optional[InsulationRating] = None
    max_voltage_drop_percent: Optional[float] = None  # None: the selector's configured limit
    size: Optional[str] = None  # explicit size: verify instead of search
    extended_grouping: bool = False

    @property
    def rating(self) -> InsulationRating:
        return self.insulation_rating or self.standard.default_insulation


@dataclass
class AmpacitySummary:
    base: float
    derated: float
    utilization_percent: float


@dataclass
class Compliance:
    is_voltage_drop_compliant: bool
    is_ampacity_compliant: bool

    @property
    def is_fully_compliant(self) -> bool:
        return self.is_voltage_drop_compliant and self.is_ampacity_compliant


@dataclass
class EarthConductor:
    size: str
    formatted_size: str
    rule: str
    standard_reference: str


@dataclass
class CableSizingResult:
    recommended_size: str
    formatted_size: str
    standard: Standard
    voltage_drop: VoltageDrop
    ampacity: AmpacitySummary
    derating_factors: DeratingFactor
    compliance: Compliance
    warnings: List[str] = field(default_factory=list)
    standard_references: List[str] = field(default_factory=list)
    alternative_sizes: List[str] = field(default_factory=list)
    earth_conductor: Optional[EarthConductor] = None

    def to_dict(self) -> dict:
        """Plain structured record, suitable for storing verbatim."""
        data = asdict(self)
        data["standard"] = self.standard.value
        data["compliance"]["is_fully_compliant"] = self.compliance.is_fully_compliant
        data["derating_factors"]["warnings"] = list(self.derating_factors.warnings)
        return data


LengthLike = Union[Length, float, int]
