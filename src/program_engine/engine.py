"""ProgramEngine — forward-chaining resolver from measurements to a program."""

from __future__ import annotations

import logging

from program_engine.edge_cases.handler import EdgeCaseHandler
from program_engine.math.bmi import compute_bmi
from program_engine.math.body_fat import classify
from program_engine.models.combination import Combination
from program_engine.models.decision_record import DecisionRecord
from program_engine.models.decision_trace import (
    ResolutionStep,
    ResolutionTrace,
    StepResult,
    StepStatus,
)
from program_engine.models.measurement import Measurement
from program_engine.models.rule import Rule
from program_engine.record_builder import build_decision_record
from program_engine.rule_table import RULE_TABLE, RuleTable
from program_engine.store.base import RuleStore
from program_engine.store.memory import InMemoryRuleStore

logger = logging.getLogger(__name__)


class ProgramEngine:
    """Classifies a measurement and resolves it to a program code.

    The rule store is an explicit dependency so the engine can run against
    a fixed snapshot; when none is given, a snapshot seeded from the rule
    table is used. The engine keeps no mutable state of its own.

    Usage:
        engine = ProgramEngine(InMemoryRuleStore.from_rule_table())
        record = engine.resolve(measurement)
        record, trace = engine.resolve_with_trace(measurement)
    """

    def __init__(
        self,
        store: RuleStore | None = None,
        rule_table: RuleTable = RULE_TABLE,
        edge_case_handler: EdgeCaseHandler | None = None,
    ) -> None:
        self.rule_table = rule_table
        # Without persistence, read a snapshot seeded from the canonical table
        if store is None:
            store = InMemoryRuleStore.from_rule_table(rule_table).snapshot()
        self.store = store
        self.edge_case_handler = edge_case_handler or EdgeCaseHandler(rule_table)

    def resolve(self, measurement: Measurement) -> DecisionRecord:
        """Resolve a measurement into a DecisionRecord.

        Raises:
            DefaultProgramMissingError: no rule matched and the default
                program is missing or inactive.
        """
        record, _ = self.resolve_with_trace(measurement)
        return record

    def resolve_with_trace(
        self, measurement: Measurement
    ) -> tuple[DecisionRecord, ResolutionTrace]:
        """Resolve a measurement and return the step-by-step audit trail."""
        steps: list[StepResult] = []

        # 1. Classify on the unrounded BMI
        bmi = compute_bmi(measurement.weight_kg, measurement.height_cm)
        combination = classify(measurement)
        logger.debug(
            "Classified BMI %.4f, body fat %.2f%% (%s) as %s",
            bmi,
            measurement.body_fat_percent,
            measurement.sex.label,
            combination.label,
        )
        steps.append(
            StepResult(
                step=ResolutionStep.CLASSIFY,
                status=StepStatus.APPLIED,
                explanation=f"BMI {bmi:.2f} and body fat "
                f"{measurement.body_fat_percent}% classified as {combination.label}.",
            )
        )

        # 2. Edge-case check
        resolution = self.edge_case_handler.resolve(combination)
        final = resolution.final_combination
        if resolution.was_redirected:
            logger.info("Redirected %s to %s", combination.label, final.label)
            steps.append(
                StepResult(
                    step=ResolutionStep.EDGE_CASE,
                    status=StepStatus.REDIRECTED,
                    explanation=f"{combination.label} {resolution.reason}: {final.label}.",
                )
            )
        else:
            steps.append(
                StepResult(
                    step=ResolutionStep.EDGE_CASE,
                    status=StepStatus.APPLIED,
                    explanation=f"{combination.label} is realistic.",
                )
            )

        # 3. Rule lookup
        rule = self._find_rule(final)
        if rule is not None:
            steps.append(
                StepResult(
                    step=ResolutionStep.RULE_LOOKUP,
                    status=StepStatus.APPLIED,
                    explanation=f"Matched rule {rule.rule_id or '<unnamed>'}: "
                    f"{rule.description}.",
                )
            )
        else:
            steps.append(
                StepResult(
                    step=ResolutionStep.RULE_LOOKUP,
                    status=StepStatus.NO_MATCH,
                    explanation=f"No active rule for {final.label}.",
                )
            )

        # 4. Resolve program
        if rule is not None:
            program_code = rule.program_code
            is_default = False
            steps.append(
                StepResult(
                    step=ResolutionStep.PROGRAM,
                    status=StepStatus.APPLIED,
                    explanation=f"Assigned program {program_code}.",
                )
            )
        else:
            # Raises DefaultProgramMissingError; never defaulted further
            program_code = self.store.get_default_program().code
            is_default = True
            logger.warning(
                "No active rule for %s; falling back to default program %s",
                final.label,
                program_code,
            )
            steps.append(
                StepResult(
                    step=ResolutionStep.PROGRAM,
                    status=StepStatus.FALLBACK,
                    explanation=f"Fell back to default program {program_code}.",
                )
            )

        # 5. Emit
        record = build_decision_record(
            measurement=measurement,
            bmi=bmi,
            resolution=resolution,
            program_code=program_code,
            is_default=is_default,
            rule_id=(rule.rule_id or None) if rule is not None else None,
            rule_table_version=self.rule_table.version,
        )
        logger.info(
            "Resolved %s -> %s (default=%s)",
            final.label,
            program_code,
            is_default,
        )
        return record, ResolutionTrace(step_results=tuple(steps), final_record=record)

    def _find_rule(self, combination: Combination) -> Rule | None:
        """Active rule whose program exists and is active, else None."""
        rule = self.store.get_active_rule(
            combination.bmi_category, combination.body_fat_category
        )
        if rule is None:
            return None
        program = self.store.get_program(rule.program_code)
        if program is None or not program.is_active:
            logger.warning(
                "Rule %s for %s points at unavailable program %s",
                rule.rule_id,
                combination.label,
                rule.program_code,
            )
            return None
        return rule
