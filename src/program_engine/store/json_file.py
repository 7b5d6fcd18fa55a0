"""JSON persistence for the in-memory rule store.

Document layout::

    {
      "version": "1.0.0",
      "defaultProgram": "P2",
      "programs": [{"code": "P1", "name": "...", "isActive": true}, ...],
      "rules": [{"ruleId": "R1", "bmiCategory": "B1", "bodyFatCategory": "L1",
                 "programCode": "P1", "priority": 1, "isActive": true}, ...]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from program_engine.exceptions import ConfigurationError
from program_engine.models.combination import Combination
from program_engine.models.enums import BMICategory, BodyFatCategory
from program_engine.models.rule import Program, Rule
from program_engine.rule_table import RULE_TABLE, RuleTable
from program_engine.store.memory import InMemoryRuleStore

logger = logging.getLogger(__name__)


def store_to_dict(store: InMemoryRuleStore) -> dict:
    """Convert a store into the JSON document layout."""
    return {
        "version": store.table.version,
        "defaultProgram": store.default_program_code,
        "programs": [
            {
                "code": p.code,
                "name": p.name,
                "isActive": p.is_active,
                "description": p.description,
                "cardioRatio": p.cardio_ratio,
            }
            for p in store.programs
        ],
        "rules": [
            {
                "ruleId": r.rule_id,
                "name": r.name,
                "bmiCategory": r.combination.bmi_category.code,
                "bodyFatCategory": r.combination.body_fat_category.code,
                "programCode": r.program_code,
                "priority": r.priority,
                "isActive": r.is_active,
            }
            for r in store.rules
        ],
    }


def store_from_dict(data: dict, table: RuleTable = RULE_TABLE) -> InMemoryRuleStore:
    """Build a store from the JSON document layout.

    Rules go through the store's normal admin checks, so a document with a
    rule for an impossible combination is rejected.

    A document written against another rule table version is loaded with a
    warning.

    Raises:
        ConfigurationError: the document is malformed or its default program
            does not match the rule table.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Rule store document must be a JSON object, got {type(data).__name__}"
        )
    version = data.get("version", table.version)
    if version != table.version:
        logger.warning(
            "Rule store version %s differs from rule table version %s",
            version,
            table.version,
        )
    default_code = data.get("defaultProgram", table.default_program_code)
    if default_code != table.default_program_code:
        raise ConfigurationError(
            f"Stored default program {default_code!r} does not match rule table "
            f"default {table.default_program_code!r}"
        )
    try:
        programs = tuple(
            Program(
                code=p["code"],
                name=p["name"],
                is_active=_flag(p, "isActive"),
                description=p.get("description", ""),
                cardio_ratio=p.get("cardioRatio", ""),
            )
            for p in data.get("programs", [])
        )
        rules = tuple(
            Rule(
                combination=Combination(
                    BMICategory.from_code(r["bmiCategory"]),
                    BodyFatCategory.from_code(r["bodyFatCategory"]),
                ),
                program_code=r["programCode"],
                priority=int(r.get("priority", 0)),
                is_active=_flag(r, "isActive"),
                rule_id=r.get("ruleId", ""),
                name=r.get("name", ""),
            )
            for r in data.get("rules", [])
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Malformed rule store document: {exc}") from exc

    return InMemoryRuleStore(programs=programs, rules=rules, table=table)


def _flag(entry: dict, key: str) -> bool:
    value = entry.get(key, True)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be true or false, got {value!r}")
    return value


def load_rule_store(path: Path | str, table: RuleTable = RULE_TABLE) -> InMemoryRuleStore:
    """Load a rule store from a JSON file.

    Raises:
        ConfigurationError: the file cannot be read or is not valid JSON.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read rule store {path}: {exc}") from exc
    store = store_from_dict(data, table=table)
    logger.info(
        "Loaded %d programs and %d rules from %s",
        len(store.programs),
        len(store.rules),
        path,
    )
    return store


def dump_rule_store(store: InMemoryRuleStore, path: Path | str) -> None:
    """Write a rule store to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(store_to_dict(store), handle, indent=2)
    logger.info("Wrote rule store to %s", path)
