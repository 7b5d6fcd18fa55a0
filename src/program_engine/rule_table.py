"""Canonical rule table — which combinations are realistic and their programs.

This table is the source of truth for realistic vs impossible combinations
and the seed for persisted rules. Administrative edits in a rule store can
repoint or deactivate rules but never change this classification.
"""

from __future__ import annotations

from dataclasses import dataclass

from program_engine.models.combination import Combination
from program_engine.models.enums import (
    DEFAULT_PROGRAM_CODE,
    BMICategory,
    BodyFatCategory,
)
from program_engine.models.rule import Program, Rule

RULE_TABLE_VERSION = "1.0.0"

_B = BMICategory
_L = BodyFatCategory

# (combination, program code), in BMI-then-body-fat order
_PROGRAM_MAPPING: tuple[tuple[Combination, str], ...] = (
    (Combination(_B.UNDERWEIGHT, _L.LOW), "P1"),
    (Combination(_B.UNDERWEIGHT, _L.NORMAL), "P5"),
    (Combination(_B.UNDERWEIGHT, _L.HIGH), "P9"),
    (Combination(_B.IDEAL, _L.LOW), "P6"),
    (Combination(_B.IDEAL, _L.NORMAL), "P2"),
    (Combination(_B.IDEAL, _L.HIGH), "P7"),
    (Combination(_B.OVERWEIGHT, _L.LOW), "P10"),
    (Combination(_B.OVERWEIGHT, _L.NORMAL), "P8"),
    (Combination(_B.OVERWEIGHT, _L.HIGH), "P3"),
    (Combination(_B.OBESE, _L.HIGH), "P4"),
)

# Obesity-range BMI with low/normal body fat is not physiologically typical
_IMPOSSIBLE: frozenset[Combination] = frozenset({
    Combination(_B.OBESE, _L.LOW),
    Combination(_B.OBESE, _L.NORMAL),
})

_PROGRAM_NAMES: dict[str, str] = {
    "P1": "Fat Loss Program",
    "P2": "Muscle Gain Program",
    "P3": "Weight Loss Program",
    "P4": "Extreme Weight Loss Program",
    "P5": "Lean Muscle Program",
    "P6": "Strength & Definition Program",
    "P7": "Fat Burning & Toning Program",
    "P8": "Body Recomposition Program",
    "P9": "Beginner Muscle Building Program",
    "P10": "Advanced Strength Program",
}


@dataclass(frozen=True)
class RealisticCombination:
    """One row of the realistic-combination listing."""

    combination: Combination
    program_code: str

    @property
    def description(self) -> str:
        return (
            f"{self.combination.bmi_category.label} + "
            f"{self.combination.body_fat_category.label}"
        )


class RuleTable:
    """Read-only view over a versioned combination -> program mapping.

    Usage:
        RULE_TABLE.lookup(Combination(BMICategory.IDEAL, BodyFatCategory.NORMAL))
        # -> "P2"
    """

    def __init__(
        self,
        mapping: tuple[tuple[Combination, str], ...] = _PROGRAM_MAPPING,
        impossible: frozenset[Combination] = _IMPOSSIBLE,
        default_program_code: str = DEFAULT_PROGRAM_CODE,
        version: str = RULE_TABLE_VERSION,
    ) -> None:
        overlap = {combo for combo, _ in mapping} & impossible
        if overlap:
            raise ValueError(
                f"Combinations cannot be both realistic and impossible: "
                f"{sorted(c.code for c in overlap)}"
            )
        self._rows = tuple(
            RealisticCombination(combo, code) for combo, code in mapping
        )
        self._mapping = dict(mapping)
        self._impossible = impossible
        self.default_program_code = default_program_code
        self.version = version

    def lookup(self, combination: Combination) -> str | None:
        """Return the canonical program code, or None when not found."""
        return self._mapping.get(combination)

    def is_realistic(self, combination: Combination) -> bool:
        return combination in self._mapping

    def is_impossible(self, combination: Combination) -> bool:
        return combination in self._impossible

    def list_realistic_combinations(self) -> tuple[RealisticCombination, ...]:
        """All realistic combinations in stable BMI-then-body-fat order."""
        return self._rows

    @property
    def impossible_combinations(self) -> tuple[Combination, ...]:
        return tuple(sorted(self._impossible))

    def seed_programs(self) -> tuple[Program, ...]:
        """Program records for every code referenced by the table."""
        codes = [row.program_code for row in self._rows]
        if self.default_program_code not in codes:
            codes.append(self.default_program_code)
        return tuple(
            Program(code=code, name=_PROGRAM_NAMES.get(code, f"Program {code}"))
            for code in sorted(codes, key=_program_sort_key)
        )

    def seed_rules(self) -> tuple[Rule, ...]:
        """One active rule per realistic combination, priority = table position."""
        return tuple(
            Rule(
                combination=row.combination,
                program_code=row.program_code,
                priority=index + 1,
                is_active=True,
                rule_id=f"R{index + 1}",
                name=f"Rule for {_PROGRAM_NAMES.get(row.program_code, row.program_code)}",
            )
            for index, row in enumerate(self._rows)
        )


def _program_sort_key(code: str) -> tuple[int, str]:
    """Sort P1, P2 ... P10 numerically."""
    digits = code.lstrip("P")
    return (int(digits), code) if digits.isdigit() else (10**6, code)


RULE_TABLE = RuleTable()
