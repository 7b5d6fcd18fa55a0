"""Decision record assembly — pure packaging of the resolver's outputs."""

from __future__ import annotations

from program_engine.edge_cases.strategies import EdgeCaseResolution
from program_engine.math.bmi import round_bmi
from program_engine.models.decision_record import DecisionRecord, EdgeCase
from program_engine.models.measurement import Measurement


def build_decision_record(
    measurement: Measurement,
    bmi: float,
    resolution: EdgeCaseResolution,
    program_code: str,
    is_default: bool,
    rule_id: str | None,
    rule_table_version: str,
) -> DecisionRecord:
    """Package a resolution into an immutable DecisionRecord.

    Args:
        measurement: The original input.
        bmi: Unrounded BMI; stored rounded to 2 decimals.
        resolution: Edge-case handler output; its final combination becomes
            the record's categories.
        program_code: Resolved program.
        is_default: True when no active rule matched.
        rule_id: Matched rule, None on default fallback.
        rule_table_version: Version of the canonical table in effect.
    """
    edge_case = None
    if resolution.was_redirected and resolution.original_combination is not None:
        edge_case = EdgeCase(
            original_combination=resolution.original_combination,
            redirected_combination=resolution.final_combination,
            reason=resolution.reason,
        )

    final = resolution.final_combination
    return DecisionRecord(
        measurement=measurement,
        bmi=round_bmi(bmi),
        bmi_category=final.bmi_category,
        body_fat_category=final.body_fat_category,
        program_code=program_code,
        is_default=bool(is_default),
        edge_case=edge_case,
        rule_id=None if is_default else rule_id,
        rule_table_version=rule_table_version,
    )
