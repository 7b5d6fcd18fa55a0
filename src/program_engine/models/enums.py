"""Enumerations and classification constants for the program engine.

All thresholds cite their published source.
"""

from __future__ import annotations

from enum import IntEnum, auto

from program_engine.exceptions import MeasurementValidationError


class BMICategory(IntEnum):
    """WHO adult BMI classification, ordered from lightest to heaviest."""

    UNDERWEIGHT = 1
    IDEAL = 2
    OVERWEIGHT = 3
    OBESE = 4

    @property
    def code(self) -> str:
        """Short storage code, e.g. ``B1``."""
        return f"B{self.value}"

    @property
    def label(self) -> str:
        return _BMI_LABELS[self]

    @classmethod
    def from_code(cls, code: str) -> BMICategory:
        for member in cls:
            if member.code == code:
                return member
        raise ValueError(f"Unknown BMI category code: {code!r}")


class BodyFatCategory(IntEnum):
    """Body-fat percentage classification (sex-specific thresholds)."""

    LOW = 1
    NORMAL = 2
    HIGH = 3

    @property
    def code(self) -> str:
        """Short storage code, e.g. ``L1``."""
        return f"L{self.value}"

    @property
    def label(self) -> str:
        return _BODY_FAT_LABELS[self]

    @classmethod
    def from_code(cls, code: str) -> BodyFatCategory:
        for member in cls:
            if member.code == code:
                return member
        raise ValueError(f"Unknown body fat category code: {code!r}")


class Sex(IntEnum):
    """Biological sex used as the discriminant for body-fat thresholds."""

    MALE = auto()
    FEMALE = auto()

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: object) -> Sex:
        """Parse a request value (``"male"``, ``"F"``...) into a Sex.

        Raises MeasurementValidationError for anything that is not one of
        the two variants. There is no default.
        """
        if isinstance(value, Sex):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ("male", "m"):
                return cls.MALE
            if key in ("female", "f"):
                return cls.FEMALE
        raise MeasurementValidationError(
            "Gender must be either male or female",
            {"gender": f"Invalid value: {value!r}"},
        )


class ConsultationStatus(IntEnum):
    """Lifecycle status of a stored consultation."""

    ACTIVE = auto()
    COMPLETED = auto()
    CANCELLED = auto()

    @property
    def label(self) -> str:
        return self.name.lower()


_BMI_LABELS = {
    BMICategory.UNDERWEIGHT: "Underweight",
    BMICategory.IDEAL: "Ideal",
    BMICategory.OVERWEIGHT: "Overweight",
    BMICategory.OBESE: "Obese",
}

_BODY_FAT_LABELS = {
    BodyFatCategory.LOW: "Low",
    BodyFatCategory.NORMAL: "Normal",
    BodyFatCategory.HIGH: "High",
}

# ---------------------------------------------------------------------------
# BMI thresholds — WHO (2000), Obesity: preventing and managing the global
# epidemic, Technical Report Series 894
# ---------------------------------------------------------------------------
BMI_UNDERWEIGHT_BELOW = 18.5
BMI_OVERWEIGHT_FROM = 25.0  # Ideal is 18.5-24.9
BMI_OBESE_FROM = 30.0  # Overweight is 25-29.9

# Stored BMI precision (decimal places)
BMI_STORAGE_DECIMALS = 2

# ---------------------------------------------------------------------------
# Body-fat thresholds (%) — ACE body fat chart, simplified to 3 tiers
# (low, inclusive normal band, high)
# ---------------------------------------------------------------------------
BODY_FAT_NORMAL_RANGE_PCT = {
    Sex.MALE: (10.0, 20.0),
    Sex.FEMALE: (20.0, 30.0),
}

# ---------------------------------------------------------------------------
# Input sanity bounds, enforced by the validation layer before the engine
# ---------------------------------------------------------------------------
WEIGHT_KG_RANGE = (1.0, 500.0)
HEIGHT_CM_RANGE = (50.0, 300.0)
BODY_FAT_PCT_RANGE = (1.0, 70.0)

# Free-text notes on a stored consultation
MAX_NOTES_LENGTH = 500

# ---------------------------------------------------------------------------
# Program assignment
# ---------------------------------------------------------------------------
DEFAULT_PROGRAM_CODE = "P2"  # Ideal x Normal program

EDGE_CASE_REDIRECT_REASON = (
    "redirected to nearest realistic combination — obesity with low/normal "
    "body fat is not physiologically typical"
)
