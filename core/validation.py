"""Input checking and coercion for callers outside the engine (CLI, web page)."""
import logging
import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from core.converters import convert_length_unit
from core.models import (CableSizingInput, CircuitType, ConductorMaterial, InstallationMethod,
                         InsulationRating, Length, Standard)
from standards.rules import rules_for

logger = logging.getLogger(__name__)


class InputValidationError(ValueError):
    """Carries every problem found, not just the first."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _enum_member(enum_cls, value):
    """Matches a member by value, name or value text, ignoring case."""
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower()
    for member in enum_cls:
        if text in (member.name.lower(), str(member.value).lower()):
            return member
    return value


class CableSizingRequest(BaseModel):
    """Loosely typed sizing request; ``to_input`` gives the engine's record."""

    model_config = {
        "extra": "forbid",
        "allow_inf_nan": False,
    }

    current: float = Field(gt=0)
    length: float = Field(gt=0)
    length_unit: Optional[str] = None
    system_voltage: float = Field(gt=0)
    material: ConductorMaterial = ConductorMaterial.COPPER
    installation_method: InstallationMethod = InstallationMethod.SINGLE_CONDUIT
    circuit_type: CircuitType = CircuitType.SINGLE_PHASE
    ambient_temperature: float = 30.0
    conductor_count: int = Field(default=3, ge=1)
    standard: Standard = Standard.IEC
    insulation_rating: Optional[InsulationRating] = None
    max_voltage_drop_percent: Optional[float] = Field(default=None, gt=0, le=100)
    size: Optional[str] = None
    extended_grouping: bool = False

    @field_validator("material", "installation_method", "circuit_type", "standard",
                     mode="before")
    @classmethod
    def _named_enum(cls, value, info):
        return _enum_member(cls.model_fields[info.field_name].annotation, value)

    @field_validator("insulation_rating", mode="before")
    @classmethod
    def _whole_degrees(cls, value):
        if value is None or isinstance(value, InsulationRating):
            return value
        try:
            degrees = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"'{value}' is not a temperature rating") from None
        if not degrees.is_integer():
            raise ValueError(f"{value} is not a whole number of degrees")
        return _enum_member(InsulationRating, int(degrees))

    @field_validator("size", mode="before")
    @classmethod
    def _size_text(cls, value):
        if value is None:
            return None
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("size must be a tabulated conductor size")
        return str(value).strip()

    @model_validator(mode="after")
    def _within_tables(self):
        low, high = rules_for(self.standard).temperature_domain
        if not low <= self.ambient_temperature <= high:
            raise ValueError(f"ambient_temperature {self.ambient_temperature:g}C is outside the "
                             f"{self.standard.value} table range {low:g}..{high:g}C")
        # Raises ValueError for an unknown unit
        self.native_length()
        return self

    def native_length(self) -> Length:
        unit = self.length_unit or self.standard.length_unit.value
        return convert_length_unit(self.length, unit).to(self.standard.length_unit)

    def to_input(self) -> CableSizingInput:
        return CableSizingInput(
            current=self.current,
            length=self.native_length(),
            system_voltage=self.system_voltage,
            material=self.material,
            installation_method=self.installation_method,
            circuit_type=self.circuit_type,
            ambient_temperature=self.ambient_temperature,
            conductor_count=self.conductor_count,
            standard=self.standard,
            insulation_rating=self.insulation_rating,
            max_voltage_drop_percent=self.max_voltage_drop_percent,
            size=self.size,
            extended_grouping=self.extended_grouping,
        )


def _messages(exc: ValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        where = ".".join(str(part) for part in err["loc"])
        msg = err["msg"]
        messages.append(f"{where}: {msg}" if where else msg)
    return messages


def validate_input(current, length, system_voltage, **fields) -> CableSizingInput:
    """Builds a CableSizingInput from loosely typed values.

    ``length`` may be a Length in either unit, or a number with ``length_unit``
    ('m', 'ft', 'pies', ...); without a unit the standard's own is assumed.
    The length is always converted to the standard's native unit. Other
    keyword arguments are the CableSizingInput fields; enums may be given by
    value or name in any case.
    """
    if isinstance(length, Length):
        fields["length_unit"] = length.unit.value
        length = length.value
    try:
        request = CableSizingRequest(current=current, length=length,
                                     system_voltage=system_voltage, **fields)
    except ValidationError as exc:
        errors = _messages(exc)
        logger.debug("Rejected sizing input: %s", errors)
        raise InputValidationError(errors) from exc
    return request.to_input()
