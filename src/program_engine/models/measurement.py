"""Frozen measurement — the engine's sole input."""

from __future__ import annotations

from dataclasses import dataclass

from program_engine.models.enums import Sex


@dataclass(frozen=True)
class Measurement:
    """Immutable body measurement for a single consultation.

    Values are assumed range-checked by the validation layer
    (see ``program_engine.validation``) before reaching the engine.
    """

    weight_kg: float
    height_cm: float
    body_fat_percent: float
    sex: Sex
