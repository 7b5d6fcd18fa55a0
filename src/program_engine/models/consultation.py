"""Stored consultation — a decision record plus its editable lifecycle fields."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from program_engine.exceptions import ValidationError
from program_engine.models.decision_record import DecisionRecord
from program_engine.models.enums import MAX_NOTES_LENGTH, ConsultationStatus


@dataclass(frozen=True)
class Consultation:
    """A persisted consultation entry.

    The wrapped DecisionRecord is write-once. Only ``notes`` and ``status``
    may change, and only by producing a new Consultation.
    """

    record: DecisionRecord
    notes: str = ""
    status: ConsultationStatus = ConsultationStatus.ACTIVE

    def __post_init__(self) -> None:
        if len(self.notes) > MAX_NOTES_LENGTH:
            raise ValidationError(
                f"Notes must not exceed {MAX_NOTES_LENGTH} characters",
                {"notes": f"{len(self.notes)} characters"},
            )

    def with_notes(self, notes: str) -> Consultation:
        return dataclasses.replace(self, notes=notes)

    def with_status(self, status: ConsultationStatus) -> Consultation:
        return dataclasses.replace(self, status=status)
