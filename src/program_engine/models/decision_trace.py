"""Decision trace — step-by-step audit of how a program was resolved."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import auto, IntEnum

from program_engine.models.decision_record import DecisionRecord


class ResolutionStep(IntEnum):
    """The forward-chaining steps, in evaluation order."""

    CLASSIFY = auto()
    EDGE_CASE = auto()
    RULE_LOOKUP = auto()
    PROGRAM = auto()


class StepStatus(IntEnum):
    """Outcome of a single resolution step."""

    APPLIED = auto()
    REDIRECTED = auto()
    NO_MATCH = auto()
    FALLBACK = auto()


@dataclass(frozen=True)
class StepResult:
    """Record of a single step's outcome during an engine call."""

    step: ResolutionStep
    status: StepStatus
    explanation: str = ""


@dataclass(frozen=True)
class ResolutionTrace:
    """Complete audit trail for a single engine.resolve_with_trace() call."""

    step_results: tuple[StepResult, ...] = field(default_factory=tuple)
    final_record: DecisionRecord | None = None

    def status_of(self, step: ResolutionStep) -> StepStatus | None:
        for result in self.step_results:
            if result.step == step:
                return result.status
        return None
