"""BMI x body-fat combination — the fact pair rules are keyed on."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product

from program_engine.models.enums import BMICategory, BodyFatCategory


@dataclass(frozen=True, order=True)
class Combination:
    """An ordered (BMI category, body-fat category) pair.

    Ordering follows BMI category first, then body-fat category, which is
    the stable order used for listings and reports.
    """

    bmi_category: BMICategory
    body_fat_category: BodyFatCategory

    @property
    def label(self) -> str:
        """Human-readable key, e.g. ``Obese-Low``."""
        return f"{self.bmi_category.label}-{self.body_fat_category.label}"

    @property
    def code(self) -> str:
        """Storage key, e.g. ``B4-L1``."""
        return f"{self.bmi_category.code}-{self.body_fat_category.code}"

    @classmethod
    def from_code(cls, code: str) -> Combination:
        """Parse a storage key such as ``B2-L2``."""
        bmi_code, sep, body_fat_code = code.partition("-")
        if not sep:
            raise ValueError(f"Malformed combination code: {code!r}")
        return cls(
            BMICategory.from_code(bmi_code),
            BodyFatCategory.from_code(body_fat_code),
        )

    def __str__(self) -> str:
        return self.label


def all_combinations() -> tuple[Combination, ...]:
    """All 12 combinations in BMI-then-body-fat order."""
    return tuple(
        Combination(bmi, body_fat)
        for bmi, body_fat in product(BMICategory, BodyFatCategory)
    )
