import logging
from typing import List, Optional

from core.models import DeratingFactor, InstallationMethod, InsulationRating, Standard
from standards.rules import rules_for
from standards.tables import TableLookupError

logger = logging.getLogger(__name__)


class DeratingComposer:

    @staticmethod
    def compose(standard: Standard, ambient_temperature: float,
                insulation_rating: InsulationRating, conductor_count: int,
                installation_method: Optional[InstallationMethod] = None,
                extended_grouping: bool = False) -> DeratingFactor:
        """Combines temperature correction and grouping adjustment.

        Out-of-range ambients and conductor counts raise TableLookupError instead
        of being clamped, as does an ambient the insulation is not rated for.
        """
        rules = rules_for(standard)

        f_temp = rules.temperature_factor(ambient_temperature, insulation_rating)
        if f_temp <= 0:
            raise TableLookupError(
                f"Ambient {ambient_temperature:g}C exceeds the rating of "
                f"{insulation_rating.value}C insulation ({standard.value})"
            )
        # No credit is taken for ambients below the 30C reference
        f_temp = min(f_temp, 1.0)

        f_group = rules.grouping_factor(conductor_count, installation_method, extended_grouping)
        total = min(f_temp * f_group, 1.0)

        warnings: List[str] = []
        if f_temp < 0.5:
            warnings.append(
                f"High ambient temperature {ambient_temperature:g}°C results in significant "
                f"derating ({f_temp * 100:.0f}%)"
            )
        if f_group < 0.5:
            warnings.append(
                f"Large number of conductors ({conductor_count}) results in significant "
                f"derating ({f_group * 100:.0f}%)"
            )
        if total < 0.4:
            warnings.append(
                f"Combined derating factor {total * 100:.0f}% is very low. "
                "Consider an alternative installation method."
            )

        logger.debug("%s derating: temp=%.3f group=%.3f total=%.4f",
                     standard.value, f_temp, f_group, total)
        return DeratingFactor(
            temperature_factor=f_temp,
            grouping_factor=f_group,
            total_factor=total,
            standard_reference=rules.derating_reference(installation_method),
            warnings=tuple(warnings),
        )


def derated_ampacity(base_ampacity: float, factor: DeratingFactor) -> float:
    return base_ampacity * factor.total_factor
