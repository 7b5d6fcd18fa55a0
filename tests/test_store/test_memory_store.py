"""Tests for InMemoryRuleStore administrative edits."""

from __future__ import annotations

import pytest

from program_engine.exceptions import (
    DefaultProgramMissingError,
    ImmutableCombinationError,
    RuleStoreError,
    UnknownProgramError,
)
from program_engine.models.combination import Combination
from program_engine.models.enums import BMICategory, BodyFatCategory
from program_engine.models.rule import Program, Rule
from program_engine.store.memory import InMemoryRuleStore

IDEAL_NORMAL = Combination(BMICategory.IDEAL, BodyFatCategory.NORMAL)
OBESE_LOW = Combination(BMICategory.OBESE, BodyFatCategory.LOW)


class TestSeededStore:
    def test_seed_contents(self, seeded_store: InMemoryRuleStore) -> None:
        assert len(seeded_store.programs) == 10
        assert len(seeded_store.list_active_rules()) == 10
        assert seeded_store.default_program_code == "P2"

    def test_active_rule_lookup(self, seeded_store: InMemoryRuleStore) -> None:
        rule = seeded_store.get_active_rule(BMICategory.IDEAL, BodyFatCategory.NORMAL)
        assert rule is not None
        assert rule.program_code == "P2"

    def test_default_program(self, seeded_store: InMemoryRuleStore) -> None:
        assert seeded_store.get_default_program().code == "P2"


class TestEdits:
    def test_assign_program(self, seeded_store: InMemoryRuleStore) -> None:
        seeded_store.assign_program(IDEAL_NORMAL, "P8")
        rule = seeded_store.get_active_rule(BMICategory.IDEAL, BodyFatCategory.NORMAL)
        assert rule is not None
        assert rule.program_code == "P8"

    def test_assign_unknown_program(self, seeded_store: InMemoryRuleStore) -> None:
        with pytest.raises(UnknownProgramError):
            seeded_store.assign_program(IDEAL_NORMAL, "P99")

    def test_deactivate_and_reactivate(self, seeded_store: InMemoryRuleStore) -> None:
        seeded_store.set_rule_active(IDEAL_NORMAL, False)
        assert seeded_store.get_active_rule(BMICategory.IDEAL, BodyFatCategory.NORMAL) is None
        seeded_store.set_rule_active(IDEAL_NORMAL, True)
        assert seeded_store.get_active_rule(BMICategory.IDEAL, BodyFatCategory.NORMAL) is not None

    def test_rule_for_impossible_combination_rejected(
        self, seeded_store: InMemoryRuleStore
    ) -> None:
        with pytest.raises(ImmutableCombinationError):
            seeded_store.add_rule(Rule(OBESE_LOW, "P4", rule_id="bad"))

    def test_duplicate_active_rule_rejected(self, seeded_store: InMemoryRuleStore) -> None:
        with pytest.raises(RuleStoreError):
            seeded_store.add_rule(Rule(IDEAL_NORMAL, "P8", rule_id="dup"))

    def test_inactive_duplicate_allowed(self, seeded_store: InMemoryRuleStore) -> None:
        seeded_store.add_rule(Rule(IDEAL_NORMAL, "P8", is_active=False, rule_id="spare"))
        assert len(seeded_store.rules) == 11

    def test_rule_with_unknown_program(self) -> None:
        store = InMemoryRuleStore()
        with pytest.raises(UnknownProgramError):
            store.add_rule(Rule(IDEAL_NORMAL, "P2"))

    def test_duplicate_program_rejected(self, seeded_store: InMemoryRuleStore) -> None:
        with pytest.raises(RuleStoreError):
            seeded_store.add_program(Program("P1", "Again"))

    def test_replace_rule_cannot_move_combination(
        self, seeded_store: InMemoryRuleStore
    ) -> None:
        rule = next(r for r in seeded_store.rules if r.rule_id == "R5")
        moved = Rule(
            Combination(BMICategory.IDEAL, BodyFatCategory.HIGH),
            rule.program_code,
            rule_id="R5",
        )
        with pytest.raises(ImmutableCombinationError):
            seeded_store.replace_rule(moved)

    def test_replace_rule(self, seeded_store: InMemoryRuleStore) -> None:
        rule = next(r for r in seeded_store.rules if r.rule_id == "R5")
        seeded_store.replace_rule(rule.reassign("P6"))
        active = seeded_store.get_active_rule(BMICategory.IDEAL, BodyFatCategory.NORMAL)
        assert active is not None
        assert active.program_code == "P6"

    def test_edit_missing_rule(self) -> None:
        store = InMemoryRuleStore(programs=(Program("P2", "Muscle Gain"),))
        with pytest.raises(RuleStoreError):
            store.set_rule_active(IDEAL_NORMAL, False)

    def test_deactivated_default_program(self, seeded_store: InMemoryRuleStore) -> None:
        seeded_store.set_program_active("P2", False)
        with pytest.raises(DefaultProgramMissingError):
            seeded_store.get_default_program()


class TestSnapshots:
    def test_snapshot_unaffected_by_later_edits(
        self, seeded_store: InMemoryRuleStore
    ) -> None:
        before = seeded_store.snapshot()
        seeded_store.set_rule_active(IDEAL_NORMAL, False)
        assert before.get_active_rule(BMICategory.IDEAL, BodyFatCategory.NORMAL) is not None
        assert seeded_store.snapshot() is not before
