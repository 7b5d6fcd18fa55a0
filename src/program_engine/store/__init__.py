"""Rule/program stores — the persistence side the engine reads from."""

from program_engine.store.base import RuleStore
from program_engine.store.json_file import (
    dump_rule_store,
    load_rule_store,
    store_from_dict,
    store_to_dict,
)
from program_engine.store.memory import InMemoryRuleStore, RuleSnapshot

__all__ = [
    "InMemoryRuleStore",
    "RuleSnapshot",
    "RuleStore",
    "dump_rule_store",
    "load_rule_store",
    "store_from_dict",
    "store_to_dict",
]
