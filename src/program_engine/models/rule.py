"""Rule and program records as seen by the engine."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from program_engine.models.combination import Combination


@dataclass(frozen=True)
class Program:
    """A training/nutrition content bundle, opaque to classification."""

    code: str
    name: str
    is_active: bool = True
    description: str = ""
    cardio_ratio: str = ""


@dataclass(frozen=True)
class Rule:
    """IF combination THEN program.

    The combination is fixed for the lifetime of a rule. Administrative
    edits go through ``reassign()`` and ``with_active()``, which return new
    instances and never touch the combination.
    """

    combination: Combination
    program_code: str
    priority: int = 0  # Tie-break only, lower first
    is_active: bool = True
    rule_id: str = ""
    name: str = ""

    def reassign(self, program_code: str) -> Rule:
        """Return a copy of this rule pointing at another program."""
        return dataclasses.replace(self, program_code=program_code)

    def with_active(self, is_active: bool) -> Rule:
        """Return a copy of this rule with the active flag set."""
        return dataclasses.replace(self, is_active=is_active)

    @property
    def description(self) -> str:
        return (
            f"IF BMI = {self.combination.bmi_category.label} "
            f"AND Body Fat = {self.combination.body_fat_category.label} "
            f"THEN Program = {self.program_code}"
        )
