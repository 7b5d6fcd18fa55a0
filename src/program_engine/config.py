"""Environment-variable-based configuration for the program engine tools."""

from __future__ import annotations

import os
from pathlib import Path

from program_engine.models.enums import DEFAULT_PROGRAM_CODE

_rules_path = os.environ.get("PROGRAM_ENGINE_RULES_PATH", "")
RULES_PATH: Path | None = Path(_rules_path).expanduser() if _rules_path else None
DEFAULT_PROGRAM: str = os.environ.get("PROGRAM_ENGINE_DEFAULT_PROGRAM", DEFAULT_PROGRAM_CODE)
LOG_LEVEL: str = os.environ.get("PROGRAM_ENGINE_LOG_LEVEL", "INFO").upper()
