"""Data models for the program engine."""

from program_engine.models.combination import Combination, all_combinations
from program_engine.models.consultation import Consultation
from program_engine.models.decision_record import DecisionRecord, EdgeCase
from program_engine.models.decision_trace import (
    ResolutionStep,
    ResolutionTrace,
    StepResult,
    StepStatus,
)
from program_engine.models.enums import (
    BMICategory,
    BodyFatCategory,
    ConsultationStatus,
    Sex,
)
from program_engine.models.measurement import Measurement
from program_engine.models.rule import Program, Rule

__all__ = [
    "BMICategory",
    "BodyFatCategory",
    "Combination",
    "Consultation",
    "ConsultationStatus",
    "DecisionRecord",
    "EdgeCase",
    "Measurement",
    "Program",
    "ResolutionStep",
    "ResolutionTrace",
    "Rule",
    "Sex",
    "StepResult",
    "StepStatus",
    "all_combinations",
]
