"""Command-line entry point for consultations and rule administration.

Usage:
    program-engine consult --weight 55 --height 175 --body-fat 8 --sex male
    program-engine consult ... --json --trace
    program-engine missing-combinations
    program-engine seed --output rules.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from program_engine import config
from program_engine.engine import ProgramEngine
from program_engine.exceptions import (
    ConfigurationError,
    MeasurementValidationError,
    RuleStoreError,
)
from program_engine.reporting import missing_combinations
from program_engine.rule_table import RULE_TABLE, RuleTable
from program_engine.serialization import to_consultation_json_string
from program_engine.store.json_file import dump_rule_store, load_rule_store
from program_engine.store.memory import InMemoryRuleStore
from program_engine.validation import parse_measurement

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def _build_table() -> RuleTable:
    if config.DEFAULT_PROGRAM == RULE_TABLE.default_program_code:
        return RULE_TABLE
    return RuleTable(default_program_code=config.DEFAULT_PROGRAM)


def _build_store(table: RuleTable) -> InMemoryRuleStore:
    """Load the configured rule store, or seed one from the rule table."""
    if config.RULES_PATH is not None:
        return load_rule_store(config.RULES_PATH, table=table)
    return InMemoryRuleStore.from_rule_table(table)


def _cmd_consult(args: argparse.Namespace) -> int:
    measurement = parse_measurement(
        {
            "weight": args.weight,
            "height": args.height,
            "bodyFatPercentage": args.body_fat,
            "gender": args.sex,
        }
    )
    table = _build_table()
    engine = ProgramEngine(_build_store(table), rule_table=table)
    record, trace = engine.resolve_with_trace(measurement)

    if args.json:
        print(to_consultation_json_string(record, indent=2))
    else:
        print(f"BMI:        {record.bmi:.2f} ({record.bmi_category.label})")
        print(f"Body fat:   {record.body_fat_category.label}")
        print(f"Program:    {record.program_code}"
              + (" (default)" if record.is_default else ""))
        if record.edge_case is not None:
            print(
                f"Edge case:  {record.edge_case.original_combination.label} -> "
                f"{record.edge_case.redirected_combination.label}"
            )
    if args.trace:
        for result in trace.step_results:
            print(f"  [{result.step.name}] {result.status.name}: {result.explanation}")
    return EXIT_OK


def _cmd_missing(args: argparse.Namespace) -> int:
    table = _build_table()
    report = missing_combinations(_build_store(table), table)
    print(json.dumps(report.to_dict(), indent=2))
    return EXIT_OK


def _cmd_seed(args: argparse.Namespace) -> int:
    store = InMemoryRuleStore.from_rule_table(_build_table())
    dump_rule_store(store, args.output)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="program-engine",
        description="Assign a training program from body measurements",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    consult = sub.add_parser("consult", help="Resolve a program for a measurement")
    consult.add_argument("--weight", required=True, help="Weight in kg")
    consult.add_argument("--height", required=True, help="Height in cm")
    consult.add_argument("--body-fat", required=True, help="Body fat percentage")
    consult.add_argument("--sex", required=True, help="male or female")
    consult.add_argument("--json", action="store_true", help="Print the JSON record")
    consult.add_argument("--trace", action="store_true", help="Print the resolution trace")
    consult.set_defaults(func=_cmd_consult)

    missing = sub.add_parser(
        "missing-combinations", help="List realistic combinations without an active rule"
    )
    missing.set_defaults(func=_cmd_missing)

    seed = sub.add_parser("seed", help="Write the seed rule store to a JSON file")
    seed.add_argument("--output", required=True, help="Destination JSON path")
    seed.set_defaults(func=_cmd_seed)

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        return args.func(args)
    except MeasurementValidationError as exc:
        print(f"{exc}:", file=sys.stderr)
        for field_name, message in sorted(exc.errors.items()):
            print(f"  {field_name}: {message}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except (ConfigurationError, RuleStoreError) as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
