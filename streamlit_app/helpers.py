"""Utility helpers bridging the Streamlit UI and the program engine.

Pure functions for formatting and result-row construction.
"""

from __future__ import annotations

from program_engine.models.decision_record import DecisionRecord
from program_engine.models.enums import BMICategory, BodyFatCategory, Sex
from program_engine.models.rule import Program
from program_engine.store.base import RuleStore

# ---------------------------------------------------------------------------
# Color maps
# ---------------------------------------------------------------------------

BMI_COLORS: dict[BMICategory, str] = {
    BMICategory.UNDERWEIGHT: "#4A90D9",
    BMICategory.IDEAL: "#2ECC71",
    BMICategory.OVERWEIGHT: "#F39C12",
    BMICategory.OBESE: "#E74C3C",
}

BODY_FAT_COLORS: dict[BodyFatCategory, str] = {
    BodyFatCategory.LOW: "#4A90D9",
    BodyFatCategory.NORMAL: "#2ECC71",
    BodyFatCategory.HIGH: "#E74C3C",
}

SEX_OPTIONS: dict[str, Sex] = {
    "Male": Sex.MALE,
    "Female": Sex.FEMALE,
}

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_bmi(bmi: float) -> str:
    """Format a BMI value. e.g. 17.96 -> '17.96 kg/m²'."""
    return f"{bmi:.2f} kg/m²"


def format_program(program: Program | None, code: str) -> str:
    """Program display name with its code, e.g. 'P1 — Fat Loss Program'."""
    if program is None:
        return code
    return f"{code} — {program.name}"


def result_rows(record: DecisionRecord, store: RuleStore) -> list[tuple[str, str]]:
    """Label/value rows summarising a decision for display."""
    program = store.get_program(record.program_code)
    rows = [
        ("BMI", format_bmi(record.bmi)),
        ("BMI category", record.bmi_category.label),
        ("Body fat category", record.body_fat_category.label),
        ("Program", format_program(program, record.program_code)),
        ("Default program used", "Yes" if record.is_default else "No"),
    ]
    if record.edge_case is not None:
        rows.append(
            (
                "Edge case",
                f"{record.edge_case.original_combination.label} → "
                f"{record.edge_case.redirected_combination.label}",
            )
        )
    return rows
