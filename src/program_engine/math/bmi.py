"""Body Mass Index calculation and classification.

Reference: WHO (2000), Technical Report Series 894. BMI = kg / m^2.
"""

from __future__ import annotations

import math

from program_engine.models.enums import (
    BMI_OBESE_FROM,
    BMI_OVERWEIGHT_FROM,
    BMI_STORAGE_DECIMALS,
    BMI_UNDERWEIGHT_BELOW,
    BMICategory,
)


def compute_bmi(weight_kg: float, height_cm: float) -> float:
    """Calculate the unrounded BMI from weight (kg) and height (cm).

    Classification must use this unrounded value; rounding happens only
    when the value is stored (see ``round_bmi``).

    Args:
        weight_kg: Body weight in kilograms.
        height_cm: Standing height in centimetres.

    Returns:
        BMI in kg/m^2. A zero height gives infinity, which classifies
        as Obese.
    """
    height_m = height_cm / 100.0
    if height_m == 0:
        return math.inf
    return weight_kg / (height_m * height_m)


def round_bmi(bmi: float) -> float:
    """Round a BMI to storage precision (2 decimals)."""
    return round(bmi, BMI_STORAGE_DECIMALS)


def classify_bmi(bmi: float) -> BMICategory:
    """Map a BMI value to its WHO category.

    <18.5 Underweight, 18.5-24.9 Ideal, 25-29.9 Overweight, >=30 Obese.
    Unrounded values between 24.9 and 25 (or 29.9 and 30) stay in the
    lower category.
    """
    if bmi < BMI_UNDERWEIGHT_BELOW:
        return BMICategory.UNDERWEIGHT
    if bmi < BMI_OVERWEIGHT_FROM:
        return BMICategory.IDEAL
    if bmi < BMI_OBESE_FROM:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE
