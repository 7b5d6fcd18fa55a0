"""Decision record — the write-once output of a single engine call."""

from __future__ import annotations

from dataclasses import dataclass

from program_engine.models.combination import Combination
from program_engine.models.enums import BMICategory, BodyFatCategory
from program_engine.models.measurement import Measurement


@dataclass(frozen=True)
class EdgeCase:
    """Audit entry for an impossible combination that was redirected."""

    original_combination: Combination
    redirected_combination: Combination
    reason: str


@dataclass(frozen=True)
class DecisionRecord:
    """Immutable program assignment for one consultation.

    This is the unit handed to the persistence collaborator. Every field is
    always populated: ``edge_case`` is None when no redirection happened and
    ``rule_id`` is None when the default program was used.
    """

    measurement: Measurement
    bmi: float  # Rounded for storage
    bmi_category: BMICategory
    body_fat_category: BodyFatCategory
    program_code: str
    is_default: bool
    edge_case: EdgeCase | None
    rule_id: str | None
    rule_table_version: str

    @property
    def combination(self) -> Combination:
        """The final (post-redirection) combination."""
        return Combination(self.bmi_category, self.body_fat_category)

    @property
    def was_redirected(self) -> bool:
        return self.edge_case is not None
