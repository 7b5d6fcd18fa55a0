"""Tests for JSON persistence of the rule store."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from program_engine.exceptions import ConfigurationError, ImmutableCombinationError
from program_engine.models.combination import Combination
from program_engine.models.enums import BMICategory, BodyFatCategory
from program_engine.store.json_file import (
    dump_rule_store,
    load_rule_store,
    store_from_dict,
    store_to_dict,
)
from program_engine.store.memory import InMemoryRuleStore


class TestStoreDocument:
    def test_layout(self, seeded_store: InMemoryRuleStore) -> None:
        data = store_to_dict(seeded_store)
        assert data["version"] == "1.0.0"
        assert data["defaultProgram"] == "P2"
        assert len(data["programs"]) == 10
        first = data["rules"][0]
        assert first["bmiCategory"] == "B1"
        assert first["bodyFatCategory"] == "L1"
        assert first["programCode"] == "P1"

    def test_edits_survive_file(
        self, seeded_store: InMemoryRuleStore, tmp_path: Path
    ) -> None:
        seeded_store.set_rule_active(
            Combination(BMICategory.IDEAL, BodyFatCategory.HIGH), False
        )
        path = tmp_path / "nested" / "rules.json"
        dump_rule_store(seeded_store, path)
        loaded = load_rule_store(path)
        assert loaded.programs == seeded_store.programs
        assert loaded.rules == seeded_store.rules
        assert loaded.get_active_rule(BMICategory.IDEAL, BodyFatCategory.HIGH) is None

    def test_mismatched_default_rejected(self, seeded_store: InMemoryRuleStore) -> None:
        data = store_to_dict(seeded_store)
        data["defaultProgram"] = "P7"
        with pytest.raises(ConfigurationError):
            store_from_dict(data)

    def test_malformed_rule_rejected(self, seeded_store: InMemoryRuleStore) -> None:
        data = store_to_dict(seeded_store)
        data["rules"][0]["bmiCategory"] = "B9"
        with pytest.raises(ConfigurationError):
            store_from_dict(data)

    def test_impossible_rule_rejected(self, seeded_store: InMemoryRuleStore) -> None:
        data = store_to_dict(seeded_store)
        data["rules"].append(
            {"bmiCategory": "B4", "bodyFatCategory": "L1", "programCode": "P4"}
        )
        with pytest.raises(ImmutableCombinationError):
            store_from_dict(data)

    def test_written_file_is_json(
        self, seeded_store: InMemoryRuleStore, tmp_path: Path
    ) -> None:
        path = tmp_path / "rules.json"
        dump_rule_store(seeded_store, path)
        assert json.loads(path.read_text(encoding="utf-8"))["defaultProgram"] == "P2"


class TestStrictDocument:
    @pytest.mark.parametrize("document", [[], "rules", 3, None])
    def test_non_object_document_rejected(self, document: object) -> None:
        with pytest.raises(ConfigurationError):
            store_from_dict(document)  # type: ignore[arg-type]

    @pytest.mark.parametrize("flag", ["false", 0, None])
    def test_rule_flag_must_be_bool(
        self, seeded_store: InMemoryRuleStore, flag: object
    ) -> None:
        data = store_to_dict(seeded_store)
        data["rules"][0]["isActive"] = flag
        with pytest.raises(ConfigurationError):
            store_from_dict(data)

    def test_program_flag_must_be_bool(self, seeded_store: InMemoryRuleStore) -> None:
        data = store_to_dict(seeded_store)
        data["programs"][0]["isActive"] = "false"
        with pytest.raises(ConfigurationError):
            store_from_dict(data)

    def test_version_mismatch_logged(
        self, seeded_store: InMemoryRuleStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        data = store_to_dict(seeded_store)
        data["version"] = "0.9.0"
        with caplog.at_level(logging.WARNING, logger="program_engine.store.json_file"):
            loaded = store_from_dict(data)
        assert "0.9.0" in caplog.text
        assert loaded.rules == seeded_store.rules


class TestLoadErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            load_rule_store(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_rule_store(path)
