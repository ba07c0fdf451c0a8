import dataclasses
import logging
from typing import Dict, List, Optional, Sequence

from core.ampacity import AmpacityResolver
from core.config import load_config
from core.derating import DeratingComposer, derated_ampacity
from core.grounding import earth_conductor
from core.models import CableSizingInput, CableSizingResult, DeratingFactor
from core.reporter import Candidate, ComplianceReporter
from core.voltage_drop import VoltageDropCalculator
from standards.rules import rules_for
from standards.tables import TableLookupError

logger = logging.getLogger(__name__)


class ConductorSelector:
    """Smallest tabulated size that satisfies both derated ampacity and voltage drop.

    Stateless between calls: the same input always gives the same result.
    """

    def __init__(self, config: Optional[Dict[str, float]] = None):
        self.config = load_config(config)
        self.reporter = ComplianceReporter(self.config["utilization_warning_percent"],
                                           self.config["dangerous_voltage_drop_percent"])

    def evaluate(self, sizing_input: CableSizingInput, size: str,
                 derating: DeratingFactor) -> Candidate:
        lookup = AmpacityResolver.resolve(sizing_input.standard, sizing_input.material,
                                          sizing_input.rating, size)
        derated = derated_ampacity(lookup.base_ampacity, derating)
        limit = sizing_input.max_voltage_drop_percent
        if limit is None:
            limit = self.config["max_voltage_drop_percent"]
        vd = VoltageDropCalculator.drop(
            sizing_input.current, sizing_input.length, size, sizing_input.material,
            sizing_input.circuit_type, sizing_input.standard, sizing_input.system_voltage,
            max_percent=limit,
            dangerous_percent=self.config["dangerous_voltage_drop_percent"],
        )
        return Candidate(
            size=size,
            lookup=lookup,
            derated_ampacity=derated,
            voltage_drop=vd,
            ampacity_ok=derated >= sizing_input.current,
            voltage_ok=not vd.is_violation,
        )

    def select(self, sizing_input: CableSizingInput) -> CableSizingResult:
        if sizing_input.max_voltage_drop_percent is None:
            sizing_input = dataclasses.replace(
                sizing_input, max_voltage_drop_percent=self.config["max_voltage_drop_percent"])
        rules = rules_for(sizing_input.standard)
        derating = DeratingComposer.compose(
            sizing_input.standard, sizing_input.ambient_temperature, sizing_input.rating,
            sizing_input.conductor_count, sizing_input.installation_method,
            sizing_input.extended_grouping,
        )

        if sizing_input.size is not None:
            # Verification of a caller-chosen size; a table miss is the caller's to handle
            candidate = self.evaluate(sizing_input, sizing_input.size, derating)
            logger.info("%s verify %s: ampacity_ok=%s voltage_ok=%s", rules.standard.value,
                        candidate.size, candidate.ampacity_ok, candidate.voltage_ok)
            return self._report(sizing_input, candidate, derating)

        wanted_alternatives = int(self.config["alternative_sizes"])
        chosen: Optional[Candidate] = None
        largest: Optional[Candidate] = None
        alternatives: List[str] = []

        for size in rules.sizes:
            try:
                candidate = self.evaluate(sizing_input, size, derating)
            except TableLookupError as e:
                logger.debug("Skipping %s %s: %s", rules.standard.value, size, e)
                continue
            largest = candidate
            logger.debug("%s %s: derated=%.1fA vd=%.2f%% ampacity_ok=%s voltage_ok=%s",
                         rules.standard.value, size, candidate.derated_ampacity,
                         candidate.voltage_drop.percent or 0.0,
                         candidate.ampacity_ok, candidate.voltage_ok)

            if chosen is None:
                if candidate.is_compliant:
                    chosen = candidate
            elif candidate.is_compliant:
                alternatives.append(size)

            if chosen is not None and len(alternatives) >= wanted_alternatives:
                break

        if chosen is None:
            if largest is None:
                raise TableLookupError(
                    f"No {rules.standard.value} {sizing_input.material.value.lower()} size "
                    f"is tabulated for {sizing_input.rating.value}C insulation"
                )
            logger.info("%s search exhausted; reporting largest size %s as non-compliant",
                        rules.standard.value, largest.size)
            return self._report(sizing_input, largest, derating, exhausted=True)

        logger.info("%s selected %s for %.1fA", rules.standard.value, chosen.size,
                    sizing_input.current)
        return self._report(sizing_input, chosen, derating, alternatives)

    def _report(self, sizing_input: CableSizingInput, candidate: Candidate,
                derating: DeratingFactor, alternatives: Sequence[str] = (),
                exhausted: bool = False) -> CableSizingResult:
        earth = earth_conductor(sizing_input.standard, candidate.size,
                                sizing_input.current, sizing_input.material)
        return self.reporter.assemble(sizing_input, candidate, derating, alternatives,
                                      exhausted=exhausted, earth=earth)


_default_selector = ConductorSelector()


def select_conductor(sizing_input: CableSizingInput) -> CableSizingResult:
    """Engine entry point. Raises TableLookupError for unsupported combinations."""
    return _default_selector.select(sizing_input)
