"""Rule/program store contract consumed by the engine."""

from __future__ import annotations

from abc import ABC, abstractmethod

from program_engine.exceptions import DefaultProgramMissingError
from program_engine.models.enums import BMICategory, BodyFatCategory
from program_engine.models.rule import Program, Rule


class RuleStore(ABC):
    """Read-side interface to persisted rules and programs.

    Subclasses must define:
        default_program_code: code of the designated fallback program
        get_active_rule(): highest-priority active rule for a combination
        get_program(): program by code, active or not
        list_active_rules(): every active rule
    """

    default_program_code: str

    @abstractmethod
    def get_active_rule(
        self, bmi_category: BMICategory, body_fat_category: BodyFatCategory
    ) -> Rule | None:
        """Return the active rule for the combination, or None.

        When several active rules match, the lowest priority value wins.
        """
        ...

    @abstractmethod
    def get_program(self, code: str) -> Program | None:
        ...

    @abstractmethod
    def list_active_rules(self) -> tuple[Rule, ...]:
        ...

    def get_default_program(self) -> Program:
        """Return the designated default program.

        Raises:
            DefaultProgramMissingError: if the program is absent or inactive.
        """
        program = self.get_program(self.default_program_code)
        if program is None or not program.is_active:
            raise DefaultProgramMissingError(self.default_program_code)
        return program
