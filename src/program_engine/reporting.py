"""Missing-combinations report for rule administrators.

Diffs the store's active rules against the canonical realistic set so an
administrator can see which combinations would fall back to the default
program.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from program_engine.models.combination import Combination
from program_engine.rule_table import RULE_TABLE, RealisticCombination, RuleTable
from program_engine.store.base import RuleStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissingCombinationsReport:
    """Coverage of active rules over the realistic combinations.

    ``total`` counts realistic combinations only, so ``covered`` plus
    ``missing`` always adds up to it. Impossible combinations are listed
    separately.
    """

    total: int
    covered: tuple[Combination, ...] = field(default_factory=tuple)
    missing: tuple[RealisticCombination, ...] = field(default_factory=tuple)
    impossible: tuple[Combination, ...] = field(default_factory=tuple)

    @property
    def is_complete(self) -> bool:
        return not self.missing

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "existing": len(self.covered),
            "missing": len(self.missing),
            "missingCombinations": [
                {
                    "combination": row.combination.code,
                    "label": row.combination.label,
                    "bmiCategory": row.combination.bmi_category.code,
                    "bodyFatCategory": row.combination.body_fat_category.code,
                    "description": row.description,
                    "suggestedProgram": row.program_code,
                }
                for row in self.missing
            ],
            "impossibleCombinations": [c.code for c in self.impossible],
        }


def missing_combinations(
    store: RuleStore, table: RuleTable = RULE_TABLE
) -> MissingCombinationsReport:
    """Report realistic combinations with no active rule in *store*.

    Impossible combinations are listed separately; they are never
    "missing" because they are redirected before rule lookup.
    """
    active = {rule.combination for rule in store.list_active_rules()}
    missing = tuple(
        row for row in table.list_realistic_combinations()
        if row.combination not in active
    )
    if missing:
        logger.warning(
            "%d realistic combinations have no active rule: %s",
            len(missing),
            ", ".join(row.combination.code for row in missing),
        )
    return MissingCombinationsReport(
        total=len(table.list_realistic_combinations()),
        covered=tuple(sorted(c for c in active if table.is_realistic(c))),
        missing=missing,
        impossible=table.impossible_combinations,
    )
