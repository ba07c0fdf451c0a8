from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from core.config import DANGEROUS_VOLTAGE_DROP_PERCENT, UTILIZATION_WARNING_PERCENT
from core.models import (AmpacityLookup, AmpacitySummary, CableSizingInput, CableSizingResult,
                         Compliance, ConductorMaterial, DeratingFactor, EarthConductor,
                         VoltageDrop)
from standards.rules import rules_for

ALUMINUM_NOTE = ("Aluminum conductors: use terminations listed for aluminum (AL/CU) "
                 "and apply oxide-inhibiting compound at connections.")
EXHAUSTED_ADVICE = ("exceeds maximum conductor size for standard table; "
                    "consider splitting circuit or parallel runs")


@dataclass(frozen=True)
class Candidate:
    """One conductor size evaluated against both constraints."""
    size: str
    lookup: AmpacityLookup
    derated_ampacity: float
    voltage_drop: VoltageDrop
    ampacity_ok: bool
    voltage_ok: bool

    @property
    def is_compliant(self) -> bool:
        return self.ampacity_ok and self.voltage_ok


def failed_constraints(candidate: Candidate, sizing_input: CableSizingInput) -> List[str]:
    failed = []
    if not candidate.ampacity_ok:
        failed.append(f"ampacity (derated {candidate.derated_ampacity:.1f}A < "
                      f"{sizing_input.current:g}A required)")
    if not candidate.voltage_ok:
        failed.append(f"voltage drop ({candidate.voltage_drop.percent:.2f}% > "
                      f"{sizing_input.max_voltage_drop_percent:g}% limit)")
    return failed


class ComplianceReporter:
    """Assembles the result record. Computes nothing beyond ratios for display."""

    def __init__(self, utilization_warning_percent: float = UTILIZATION_WARNING_PERCENT,
                 dangerous_voltage_drop_percent: float = DANGEROUS_VOLTAGE_DROP_PERCENT):
        self.utilization_warning_percent = utilization_warning_percent
        self.dangerous_voltage_drop_percent = dangerous_voltage_drop_percent

    def assemble(self, sizing_input: CableSizingInput, candidate: Candidate,
                 derating: DeratingFactor, alternatives: Sequence[str] = (),
                 exhausted: bool = False,
                 earth: Optional[EarthConductor] = None) -> CableSizingResult:
        rules = rules_for(sizing_input.standard)
        utilization = 100.0 * sizing_input.current / candidate.derated_ampacity

        warnings: List[str] = []
        formatted = rules.format_size(candidate.size)
        if exhausted:
            failed = " and ".join(failed_constraints(candidate, sizing_input))
            warnings.append(
                f"No {sizing_input.standard.value} size meets all requirements; largest "
                f"available size {formatted} fails {failed}: {EXHAUSTED_ADVICE}."
            )
        elif sizing_input.size is not None and not candidate.is_compliant:
            failed = " and ".join(failed_constraints(candidate, sizing_input))
            warnings.append(f"Selected size {formatted} fails {failed}.")

        if sizing_input.material is ConductorMaterial.ALUMINUM:
            warnings.append(ALUMINUM_NOTE)
        if utilization > self.utilization_warning_percent:
            warnings.append(
                f"High cable utilization ({utilization:.0f}%). "
                "Consider next size up for safety margin."
            )
        if candidate.voltage_drop.is_dangerous:
            warnings.append(
                f"Voltage drop {candidate.voltage_drop.percent:.1f}% is above "
                f"{self.dangerous_voltage_drop_percent:g}% "
                "and may prevent equipment from operating."
            )
        warnings.extend(derating.warnings)

        return CableSizingResult(
            recommended_size=candidate.size,
            formatted_size=formatted + (" (INSUFFICIENT)" if exhausted else ""),
            standard=sizing_input.standard,
            voltage_drop=candidate.voltage_drop,
            ampacity=AmpacitySummary(
                base=candidate.lookup.base_ampacity,
                derated=candidate.derated_ampacity,
                utilization_percent=round(utilization, 1),
            ),
            derating_factors=derating,
            compliance=Compliance(
                is_voltage_drop_compliant=candidate.voltage_ok,
                is_ampacity_compliant=candidate.ampacity_ok,
            ),
            warnings=warnings,
            standard_references=rules.citations(sizing_input.installation_method),
            alternative_sizes=list(alternatives),
            earth_conductor=earth,
        )


def summarize(result: CableSizingResult) -> Dict[str, Optional[object]]:
    """Flat one-line view of a result, as shown by the CLI and the export."""
    vd = result.voltage_drop
    return {
        "Standard": result.standard.value,
        "Size": result.formatted_size,
        "Base Ampacity (A)": result.ampacity.base,
        "Derated Ampacity (A)": round(result.ampacity.derated, 1),
        "Utilization (%)": result.ampacity.utilization_percent,
        "Derating Factor": round(result.derating_factors.total_factor, 3),
        "VD (V)": round(vd.volts, 2),
        "VD (%)": round(vd.percent, 2) if vd.percent is not None else None,
        "Compliant": result.compliance.is_fully_compliant,
        "Earth Conductor": result.earth_conductor.formatted_size if result.earth_conductor else None,
        "Alternatives": ", ".join(result.alternative_sizes),
        "Warnings": " | ".join(result.warnings),
    }
