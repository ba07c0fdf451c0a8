"""Base ampacity and resistance lookup from the standard tables."""
from core.models import AmpacityLookup, ConductorMaterial, InsulationRating, Standard
from standards.rules import rules_for


class AmpacityResolver:

    @staticmethod
    def resolve(standard: Standard, material: ConductorMaterial,
                insulation_rating: InsulationRating, size: str) -> AmpacityLookup:
        """Exact table read; no interpolation between ratings or sizes.

        Raises TableLookupError when the size is not one of the standard's sizes,
        when the material is not made in that size, or when the table has no
        column for the insulation rating.
        """
        rules = rules_for(standard)
        rules.size_index(size)
        table = rules.table(material)
        entry = table.entry(size, insulation_rating)
        return AmpacityLookup(
            size=entry.size,
            base_ampacity=float(entry.base_ampacity),
            resistance=entry.resistance,
            resistance_unit=table.resistance_unit,
            standard_reference=table.reference,
        )


def resolve_ampacity(standard: Standard, material: ConductorMaterial,
                     insulation_rating: InsulationRating, size: str) -> AmpacityLookup:
    return AmpacityResolver.resolve(standard, material, insulation_rating, size)
