"""In-memory rule store with copy-on-write snapshots.

Readers always see a frozen RuleSnapshot. Administrative edits build a new
snapshot under a lock and swap it in, so concurrent resolutions never
observe a half-applied edit.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable

from program_engine.exceptions import (
    ImmutableCombinationError,
    RuleStoreError,
    UnknownProgramError,
)
from program_engine.models.combination import Combination
from program_engine.models.enums import BMICategory, BodyFatCategory
from program_engine.models.rule import Program, Rule
from program_engine.rule_table import RULE_TABLE, RuleTable
from program_engine.store.base import RuleStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleSnapshot(RuleStore):
    """Immutable view of rules and programs at one point in time."""

    programs: tuple[Program, ...] = field(default_factory=tuple)
    rules: tuple[Rule, ...] = field(default_factory=tuple)
    default_program_code: str = RULE_TABLE.default_program_code

    def get_active_rule(
        self, bmi_category: BMICategory, body_fat_category: BodyFatCategory
    ) -> Rule | None:
        combination = Combination(bmi_category, body_fat_category)
        matches = [
            r for r in self.rules if r.is_active and r.combination == combination
        ]
        if not matches:
            return None
        return min(matches, key=lambda r: r.priority)

    def get_program(self, code: str) -> Program | None:
        for program in self.programs:
            if program.code == code:
                return program
        return None

    def list_active_rules(self) -> tuple[Rule, ...]:
        return tuple(r for r in self.rules if r.is_active)


class InMemoryRuleStore(RuleStore):
    """Mutable rule store for administrative edits.

    The set of realistic combinations comes from the RuleTable and cannot
    be changed here: rules may only be added for realistic combinations,
    repointed to another program, or toggled active/inactive.
    """

    def __init__(
        self,
        programs: tuple[Program, ...] = (),
        rules: tuple[Rule, ...] = (),
        table: RuleTable = RULE_TABLE,
    ) -> None:
        self.table = table
        self._lock = threading.Lock()
        self._snapshot = RuleSnapshot(
            default_program_code=table.default_program_code,
        )
        for program in programs:
            self.add_program(program)
        for rule in rules:
            self.add_rule(rule)

    @classmethod
    def from_rule_table(cls, table: RuleTable = RULE_TABLE) -> InMemoryRuleStore:
        """Build a store seeded with the table's programs and rules."""
        return cls(
            programs=table.seed_programs(),
            rules=table.seed_rules(),
            table=table,
        )

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def default_program_code(self) -> str:  # type: ignore[override]
        return self._snapshot.default_program_code

    def snapshot(self) -> RuleSnapshot:
        """Return the current frozen snapshot."""
        return self._snapshot

    def get_active_rule(
        self, bmi_category: BMICategory, body_fat_category: BodyFatCategory
    ) -> Rule | None:
        return self._snapshot.get_active_rule(bmi_category, body_fat_category)

    def get_program(self, code: str) -> Program | None:
        return self._snapshot.get_program(code)

    def list_active_rules(self) -> tuple[Rule, ...]:
        return self._snapshot.list_active_rules()

    @property
    def programs(self) -> tuple[Program, ...]:
        return self._snapshot.programs

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._snapshot.rules

    # ------------------------------------------------------------------
    # Administrative edits
    # ------------------------------------------------------------------

    def add_program(self, program: Program) -> None:
        with self._lock:
            snap = self._snapshot
            if snap.get_program(program.code) is not None:
                raise RuleStoreError(f"Program {program.code!r} already exists")
            self._snapshot = dataclasses.replace(
                snap, programs=snap.programs + (program,)
            )
        logger.debug("Added program %s", program.code)

    def add_rule(self, rule: Rule) -> None:
        """Add a rule for a realistic combination.

        Raises:
            ImmutableCombinationError: the combination is not realistic.
            UnknownProgramError: the program code is not in the store.
            RuleStoreError: an active rule for the combination already exists.
        """
        if not self.table.is_realistic(rule.combination):
            raise ImmutableCombinationError(
                f"Combination {rule.combination.label} is not a realistic "
                f"combination and cannot carry a rule"
            )
        with self._lock:
            snap = self._snapshot
            if snap.get_program(rule.program_code) is None:
                raise UnknownProgramError(rule.program_code)
            if rule.is_active and snap.get_active_rule(
                rule.combination.bmi_category, rule.combination.body_fat_category
            ) is not None:
                raise RuleStoreError(
                    f"An active rule for {rule.combination.label} already exists"
                )
            self._snapshot = dataclasses.replace(snap, rules=snap.rules + (rule,))
        logger.debug("Added rule for %s -> %s", rule.combination.code, rule.program_code)

    def replace_rule(self, rule: Rule) -> None:
        """Replace the rule with the same ``rule_id``.

        Only the program and the active flag may differ from the stored rule.
        """
        with self._lock:
            snap = self._snapshot
            current = self._find_by_id(snap, rule.rule_id)
            if current.combination != rule.combination:
                raise ImmutableCombinationError(
                    f"Rule {rule.rule_id} is bound to {current.combination.label}; "
                    f"its combination cannot change"
                )
            if snap.get_program(rule.program_code) is None:
                raise UnknownProgramError(rule.program_code)
            self._snapshot = dataclasses.replace(
                snap,
                rules=tuple(rule if r is current else r for r in snap.rules),
            )
        logger.info("Replaced rule %s", rule.rule_id)

    def assign_program(self, combination: Combination, program_code: str) -> None:
        """Point every rule for *combination* at another program."""
        with self._lock:
            snap = self._snapshot
            if snap.get_program(program_code) is None:
                raise UnknownProgramError(program_code)
            self._snapshot = self._edit_rules(
                snap, combination, lambda r: r.reassign(program_code)
            )
        logger.info("Assigned %s -> %s", combination.code, program_code)

    def set_rule_active(self, combination: Combination, is_active: bool) -> None:
        with self._lock:
            self._snapshot = self._edit_rules(
                self._snapshot, combination, lambda r: r.with_active(is_active)
            )
        logger.info(
            "Rule for %s %s", combination.code, "activated" if is_active else "deactivated"
        )

    def set_program_active(self, code: str, is_active: bool) -> None:
        with self._lock:
            snap = self._snapshot
            program = snap.get_program(code)
            if program is None:
                raise UnknownProgramError(code)
            updated = dataclasses.replace(program, is_active=is_active)
            self._snapshot = dataclasses.replace(
                snap,
                programs=tuple(updated if p is program else p for p in snap.programs),
            )
        if not is_active and code == self.default_program_code:
            logger.warning("Default program %s deactivated", code)
        else:
            logger.info(
                "Program %s %s", code, "activated" if is_active else "deactivated"
            )

    @staticmethod
    def _find_by_id(snap: RuleSnapshot, rule_id: str) -> Rule:
        for rule in snap.rules:
            if rule.rule_id == rule_id:
                return rule
        raise RuleStoreError(f"Rule {rule_id!r} not found")

    @staticmethod
    def _edit_rules(
        snap: RuleSnapshot, combination: Combination, edit: Callable[[Rule], Rule]
    ) -> RuleSnapshot:
        if not any(r.combination == combination for r in snap.rules):
            raise RuleStoreError(f"No rule exists for {combination.label}")
        return dataclasses.replace(
            snap,
            rules=tuple(
                edit(r) if r.combination == combination else r for r in snap.rules
            ),
        )
