"""Edge-case handler — redirects impossible combinations before rule lookup."""

from __future__ import annotations

from program_engine.edge_cases.strategies import (
    EdgeCaseResolution,
    EdgeCaseStrategy,
    RedirectToNearestRealistic,
)
from program_engine.models.combination import Combination
from program_engine.rule_table import RULE_TABLE, RuleTable


class EdgeCaseHandler:
    """Detects impossible combinations and redirects them.

    Uses a pluggable strategy. Default is RedirectToNearestRealistic, which
    sends both impossible Obese combinations to Obese x High.
    """

    def __init__(
        self,
        table: RuleTable = RULE_TABLE,
        strategy: EdgeCaseStrategy | None = None,
    ) -> None:
        self.table = table
        self.strategy = strategy or RedirectToNearestRealistic()

    def resolve(self, combination: Combination) -> EdgeCaseResolution:
        """Pass realistic combinations through; redirect impossible ones."""
        if not self.table.is_impossible(combination):
            return EdgeCaseResolution(
                final_combination=combination,
                was_redirected=False,
            )

        redirected = self.strategy.redirect(combination, self.table)
        return EdgeCaseResolution(
            final_combination=redirected,
            was_redirected=True,
            original_combination=combination,
            reason=self.strategy.reason,
        )


_DEFAULT_HANDLER = EdgeCaseHandler()


def resolve_edge_case(combination: Combination) -> EdgeCaseResolution:
    """Run *combination* through the canonical table's edge-case handler."""
    return _DEFAULT_HANDLER.resolve(combination)
