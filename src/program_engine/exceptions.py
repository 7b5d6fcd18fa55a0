"""Custom exception hierarchy for the program engine."""

from __future__ import annotations


class ProgramEngineError(Exception):
    """Base exception for all program_engine errors."""


class ConfigurationError(ProgramEngineError):
    """The rule/program data is misconfigured and a decision cannot be made."""


class DefaultProgramMissingError(ConfigurationError):
    """The designated default program is missing or inactive."""

    def __init__(self, code: str) -> None:
        super().__init__(
            f"Default program {code!r} is missing or inactive; "
            "cannot fall back for an unmatched combination"
        )
        self.code = code


class ValidationError(ProgramEngineError):
    """User-supplied data was rejected; ``errors`` maps field -> message."""

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors = dict(errors or {})


class MeasurementValidationError(ValidationError):
    """Raw measurement input violates the input contract."""


class RuleStoreError(ProgramEngineError):
    """An administrative rule store operation was rejected."""


class ImmutableCombinationError(RuleStoreError):
    """Attempt to bind a rule to an impossible or different combination."""


class UnknownProgramError(RuleStoreError):
    """A rule references a program code the store does not know."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Unknown program code: {code!r}")
        self.code = code
