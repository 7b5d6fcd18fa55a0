"""Input contract checks run before a measurement reaches the engine."""

from __future__ import annotations

import math
from collections.abc import Mapping

from program_engine.exceptions import MeasurementValidationError
from program_engine.models.enums import (
    BODY_FAT_PCT_RANGE,
    HEIGHT_CM_RANGE,
    WEIGHT_KG_RANGE,
    Sex,
)
from program_engine.models.measurement import Measurement

# (field name, accepted request keys, range, unit)
_NUMERIC_FIELDS = (
    ("weight", ("weight", "weightKg", "weight_kg"), WEIGHT_KG_RANGE, "kg"),
    ("height", ("height", "heightCm", "height_cm"), HEIGHT_CM_RANGE, "cm"),
    (
        "bodyFatPercentage",
        ("bodyFatPercentage", "bodyFatPercent", "body_fat_percent"),
        BODY_FAT_PCT_RANGE,
        "%",
    ),
)
_SEX_KEYS = ("gender", "sex")


def parse_measurement(data: Mapping[str, object]) -> Measurement:
    """Build a Measurement from a raw request mapping.

    All fields are checked and every problem is reported at once.

    Raises:
        MeasurementValidationError: with ``errors`` mapping field -> message.
    """
    errors: dict[str, str] = {}
    values: dict[str, float] = {}

    for name, keys, (low, high), unit in _NUMERIC_FIELDS:
        raw = _first_present(data, keys)
        if raw is None:
            errors[name] = f"{name} is required"
            continue
        try:
            value = float(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            errors[name] = f"{name} must be a number"
            continue
        if math.isnan(value) or not low <= value <= high:
            errors[name] = f"{name} must be between {low:g} and {high:g} {unit}"
            continue
        values[name] = value

    sex: Sex | None = None
    raw_sex = _first_present(data, _SEX_KEYS)
    if raw_sex is None:
        errors["gender"] = "gender is required"
    else:
        try:
            sex = Sex.parse(raw_sex)
        except MeasurementValidationError as exc:
            errors["gender"] = str(exc)

    if errors or sex is None:
        raise MeasurementValidationError("Validation error", errors)

    return Measurement(
        weight_kg=values["weight"],
        height_cm=values["height"],
        body_fat_percent=values["bodyFatPercentage"],
        sex=sex,
    )


def validate_measurement(measurement: Measurement) -> Measurement:
    """Range-check an already-typed Measurement; returns it unchanged."""
    return parse_measurement(
        {
            "weight": measurement.weight_kg,
            "height": measurement.height_cm,
            "bodyFatPercentage": measurement.body_fat_percent,
            "gender": measurement.sex,
        }
    )


def _first_present(data: Mapping[str, object], keys: tuple[str, ...]) -> object | None:
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return value
    return None
