from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple

from core.models import ConductorMaterial, InsulationRating, SizeTableEntry, Standard


class TableLookupError(LookupError):
    """Raised when a standard table has no row for the requested combination."""


@dataclass(frozen=True)
class ConductorRow:
    size: str
    resistance: float
    ampacity: Mapping[InsulationRating, float]


@dataclass(frozen=True)
class ConductorTable:
    """Ampacity and resistance rows for one (standard, material) pair.

    Rows follow the standard's size order. A size of the standard that the
    material is not made in is simply absent.
    """
    standard: Standard
    material: ConductorMaterial
    ratings: Tuple[InsulationRating, ...]
    rows: Tuple[ConductorRow, ...]
    resistance_unit: str
    reference: str

    def row(self, size: str) -> ConductorRow:
        for r in self.rows:
            if r.size == size:
                return r
        raise TableLookupError(
            f"No {self.standard.value} row for {self.material.value.lower()} size {size}"
        )

    def entry(self, size: str, rating: InsulationRating) -> SizeTableEntry:
        if rating not in self.ratings:
            raise TableLookupError(
                f"{self.standard.value} {self.material.value.lower()} table has no "
                f"{rating.value}C column (defined: {', '.join(str(r.value) for r in self.ratings)})"
            )
        r = self.row(size)
        return SizeTableEntry(size=r.size, base_ampacity=r.ampacity[rating],
                              resistance=r.resistance, temperature_rating=rating)

    def sizes(self) -> Tuple[str, ...]:
        return tuple(r.size for r in self.rows)

    def __iter__(self) -> Iterator[ConductorRow]:
        return iter(self.rows)


def build_table(standard: Standard, material: ConductorMaterial,
                ratings: Sequence[InsulationRating],
                data: Sequence[Tuple], resistance_unit: str, reference: str,
                size_order: Sequence[str]) -> ConductorTable:
    """Builds a table from compact (size, resistance, amps...) tuples.

    Amp columns follow ``ratings``. Rows must appear in ``size_order``.
    """
    rows = []
    last_index = -1
    for size, resistance, *amps in data:
        if size not in size_order:
            raise ValueError(f"{standard.value}: size {size} is not a standard size")
        index = size_order.index(size)
        if index <= last_index:
            raise ValueError(f"{standard.value}: size {size} out of order")
        last_index = index
        if len(amps) != len(ratings):
            raise ValueError(f"{standard.value}: size {size} needs {len(ratings)} ampacities")
        rows.append(ConductorRow(size=size, resistance=resistance,
                                 ampacity=dict(zip(ratings, amps))))
    return ConductorTable(standard=standard, material=material, ratings=tuple(ratings),
                          rows=tuple(rows), resistance_unit=resistance_unit, reference=reference)


def step_lookup(buckets: Sequence[Tuple[float, float]], value: float,
                lower_bound: float, what: str) -> float:
    """Returns the factor of the first bucket whose upper limit is >= value.

    ``buckets`` is a sequence of (upper_limit, factor) in ascending order.
    Values below ``lower_bound`` or above the last limit raise TableLookupError.
    """
    if value < lower_bound:
        raise TableLookupError(f"{what} {value:g} is below the tabulated range ({lower_bound:g})")
    for upper, factor in buckets:
        if value <= upper:
            return factor
    raise TableLookupError(f"{what} {value:g} exceeds the tabulated range ({buckets[-1][0]:g})")


def tables_by_material(*tables: ConductorTable) -> Dict[ConductorMaterial, ConductorTable]:
    return {t.material: t for t in tables}


def find_table(tables: Mapping[ConductorMaterial, ConductorTable],
               standard: Standard, material: ConductorMaterial) -> ConductorTable:
    table: Optional[ConductorTable] = tables.get(material)
    if table is None:
        raise TableLookupError(f"No {standard.value} table for {material.value.lower()}")
    return table
