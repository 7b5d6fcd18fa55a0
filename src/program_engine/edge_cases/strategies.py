"""Edge-case strategies for combinations the rule table marks impossible."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from program_engine.exceptions import ConfigurationError
from program_engine.models.combination import Combination
from program_engine.models.enums import (
    EDGE_CASE_REDIRECT_REASON,
    BodyFatCategory,
)
from program_engine.rule_table import RuleTable


@dataclass(frozen=True)
class EdgeCaseResolution:
    """Result of running a combination through the edge-case handler."""

    final_combination: Combination
    was_redirected: bool
    original_combination: Combination | None = None
    reason: str = ""


class EdgeCaseStrategy(ABC):
    """Base class for impossible-combination strategies."""

    reason: str = ""

    @abstractmethod
    def redirect(self, combination: Combination, table: RuleTable) -> Combination:
        """Return the realistic combination to use instead of *combination*."""
        ...


class RedirectToNearestRealistic(EdgeCaseStrategy):
    """Keep the BMI category and move body fat to the nearest realistic tier.

    For the canonical table this sends Obese x Low and Obese x Normal to
    Obese x High, the only realistic Obese combination.
    """

    reason = EDGE_CASE_REDIRECT_REASON

    def redirect(self, combination: Combination, table: RuleTable) -> Combination:
        candidates = [
            Combination(combination.bmi_category, body_fat)
            for body_fat in BodyFatCategory
            if table.is_realistic(Combination(combination.bmi_category, body_fat))
        ]
        if not candidates:
            raise ConfigurationError(
                f"No realistic combination for BMI category "
                f"{combination.bmi_category.label}"
            )
        return min(
            candidates,
            key=lambda c: (
                abs(c.body_fat_category - combination.body_fat_category),
                -c.body_fat_category,
            ),
        )
