"""Body-fat percentage classification with sex-specific thresholds."""

from __future__ import annotations

from program_engine.math.bmi import classify_bmi, compute_bmi
from program_engine.models.combination import Combination
from program_engine.models.enums import BODY_FAT_NORMAL_RANGE_PCT, BodyFatCategory, Sex
from program_engine.models.measurement import Measurement


def classify_body_fat(percent: float, sex: Sex) -> BodyFatCategory:
    """Classify body fat into Low / Normal / High.

    Male: <10 Low, 10-20 Normal (inclusive), >20 High.
    Female: <20 Low, 20-30 Normal (inclusive), >30 High.

    Raises:
        TypeError: if ``sex`` is not a Sex. Parsing request values is the
            validation layer's job.
    """
    if not isinstance(sex, Sex):
        raise TypeError(f"sex must be a Sex, got {sex!r}")

    low, high = BODY_FAT_NORMAL_RANGE_PCT[sex]
    if percent < low:
        return BodyFatCategory.LOW
    if percent <= high:
        return BodyFatCategory.NORMAL
    return BodyFatCategory.HIGH


def classify(measurement: Measurement) -> Combination:
    """Classify a measurement into its raw (pre-redirection) combination."""
    bmi = compute_bmi(measurement.weight_kg, measurement.height_cm)
    return Combination(
        classify_bmi(bmi),
        classify_body_fat(measurement.body_fat_percent, measurement.sex),
    )
