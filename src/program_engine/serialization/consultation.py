"""Consultation JSON serialization for DecisionRecord objects.

Converts an internal DecisionRecord into the camelCase JSON returned to API
callers and stored by the consultation store.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json

from program_engine.models.consultation import Consultation
from program_engine.models.decision_record import DecisionRecord


def to_consultation_json(record: DecisionRecord) -> dict:
    """Convert a DecisionRecord to its JSON-compatible dict.

    ``edgeCase`` is present only when a redirection happened.
    """
    m = record.measurement
    data: dict = {
        "input": {
            "weight": m.weight_kg,
            "height": m.height_cm,
            "bodyFatPercentage": m.body_fat_percent,
            "gender": m.sex.label,
        },
        "bmi": record.bmi,
        "bmiCategory": record.bmi_category.label,
        "bmiCategoryCode": record.bmi_category.code,
        "bodyFatCategory": record.body_fat_category.label,
        "bodyFatCategoryCode": record.body_fat_category.code,
        "programCode": record.program_code,
        "isDefault": record.is_default,
        "ruleId": record.rule_id,
        "ruleTableVersion": record.rule_table_version,
    }
    if record.edge_case is not None:
        data["edgeCase"] = {
            "originalCombination": record.edge_case.original_combination.label,
            "redirectedCombination": record.edge_case.redirected_combination.label,
            "reason": record.edge_case.reason,
        }
    return data


def to_consultation_json_string(record: DecisionRecord, indent: int | None = None) -> str:
    """Serialize a DecisionRecord to a deterministic JSON string."""
    return json.dumps(
        to_consultation_json(record), indent=indent, sort_keys=True, ensure_ascii=False
    )


def consultation_to_json(consultation: Consultation) -> dict:
    """Stored consultation: the decision plus notes and lifecycle status."""
    data = to_consultation_json(consultation.record)
    data["notes"] = consultation.notes
    data["status"] = consultation.status.label
    return data
