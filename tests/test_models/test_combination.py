"""Tests for Combination labels, codes and ordering."""

from __future__ import annotations

import pytest

from program_engine.models.combination import Combination, all_combinations
from program_engine.models.enums import BMICategory, BodyFatCategory


class TestCombination:
    def test_label(self) -> None:
        combo = Combination(BMICategory.OBESE, BodyFatCategory.LOW)
        assert combo.label == "Obese-Low"
        assert str(combo) == "Obese-Low"

    def test_code(self) -> None:
        combo = Combination(BMICategory.OBESE, BodyFatCategory.LOW)
        assert combo.code == "B4-L1"

    def test_from_code(self) -> None:
        assert Combination.from_code("B2-L2") == Combination(
            BMICategory.IDEAL, BodyFatCategory.NORMAL
        )

    @pytest.mark.parametrize("code", ["B2L2", "B5-L1", "B1-L4", ""])
    def test_from_code_rejects_malformed(self, code: str) -> None:
        with pytest.raises(ValueError):
            Combination.from_code(code)

    def test_hashable_and_equal(self) -> None:
        a = Combination(BMICategory.IDEAL, BodyFatCategory.HIGH)
        b = Combination(BMICategory.IDEAL, BodyFatCategory.HIGH)
        assert a == b
        assert len({a, b}) == 1

    def test_all_combinations(self) -> None:
        combos = all_combinations()
        assert len(combos) == 12
        assert combos[0] == Combination(BMICategory.UNDERWEIGHT, BodyFatCategory.LOW)
        assert combos[-1] == Combination(BMICategory.OBESE, BodyFatCategory.HIGH)
        assert list(combos) == sorted(combos)
