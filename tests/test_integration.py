"""End-to-end integration tests: raw request → ProgramEngine → consultation JSON.

Covers the four reference consultations, administrative edits between
consultations, and a store persisted to disk and reloaded.
"""

from pathlib import Path

from program_engine.engine import ProgramEngine
from program_engine.models.combination import Combination
from program_engine.models.consultation import Consultation
from program_engine.models.enums import BMICategory, BodyFatCategory
from program_engine.reporting import missing_combinations
from program_engine.serialization import consultation_to_json, to_consultation_json
from program_engine.store.json_file import dump_rule_store, load_rule_store
from program_engine.store.memory import InMemoryRuleStore
from program_engine.validation import parse_measurement


class TestEndToEndIntegration:
    def test_underweight_lean_male(self) -> None:
        """55 kg / 175 cm / 8% male → Underweight x Low → P1."""
        store = InMemoryRuleStore.from_rule_table()
        m = parse_measurement(
            {"weight": 55, "height": 175, "bodyFatPercentage": 8, "gender": "male"}
        )
        data = to_consultation_json(ProgramEngine(store).resolve(m))
        assert data["bmi"] == 17.96
        assert data["bmiCategory"] == "Underweight"
        assert data["bodyFatCategory"] == "Low"
        assert data["programCode"] == "P1"
        assert data["isDefault"] is False

    def test_obese_high_female(self) -> None:
        """90 kg / 160 cm / 35% female → Obese x High directly → P4."""
        store = InMemoryRuleStore.from_rule_table()
        m = parse_measurement(
            {"weight": 90, "height": 160, "bodyFatPercentage": 35, "gender": "female"}
        )
        data = to_consultation_json(ProgramEngine(store).resolve(m))
        assert data["bmi"] == 35.16
        assert data["programCode"] == "P4"
        assert data["isDefault"] is False
        assert "edgeCase" not in data

    def test_obese_low_is_redirected(self) -> None:
        """Obese BMI with low body fat is redirected to Obese x High → P4."""
        store = InMemoryRuleStore.from_rule_table()
        m = parse_measurement(
            {"weight": 110, "height": 180, "bodyFatPercentage": 8, "gender": "male"}
        )
        data = to_consultation_json(ProgramEngine(store).resolve(m))
        assert data["programCode"] == "P4"
        assert data["bmiCategory"] == "Obese"
        assert data["bodyFatCategory"] == "High"
        assert data["edgeCase"]["originalCombination"] == "Obese-Low"
        assert data["edgeCase"]["redirectedCombination"] == "Obese-High"

    def test_deactivated_rule_uses_default(self) -> None:
        """A realistic combination whose rule was deactivated gets P2."""
        store = InMemoryRuleStore.from_rule_table()
        engine = ProgramEngine(store)
        m = parse_measurement(
            {"weight": 55, "height": 175, "bodyFatPercentage": 8, "gender": "male"}
        )
        assert engine.resolve(m).program_code == "P1"

        store.set_rule_active(Combination(BMICategory.UNDERWEIGHT, BodyFatCategory.LOW), False)
        record = engine.resolve(m)
        assert record.program_code == "P2"
        assert record.is_default is True
        assert missing_combinations(store).to_dict()["missing"] == 1

    def test_past_consultation_unchanged_by_admin_edit(self) -> None:
        store = InMemoryRuleStore.from_rule_table()
        engine = ProgramEngine(store)
        m = parse_measurement(
            {"weight": 60, "height": 165, "bodyFatPercentage": 25, "gender": "F"}
        )
        consultation = Consultation(record=engine.resolve(m), notes="First visit")
        stored = consultation_to_json(consultation)

        store.assign_program(Combination(BMICategory.IDEAL, BodyFatCategory.NORMAL), "P8")
        assert engine.resolve(m).program_code == "P8"
        assert consultation_to_json(consultation) == stored
        assert stored["programCode"] == "P2"

    def test_persisted_store_gives_same_decisions(self, tmp_path: Path) -> None:
        store = InMemoryRuleStore.from_rule_table()
        store.assign_program(Combination(BMICategory.OVERWEIGHT, BodyFatCategory.HIGH), "P4")
        path = tmp_path / "rules.json"
        dump_rule_store(store, path)

        m = parse_measurement(
            {"weight": 80, "height": 170, "bodyFatPercentage": 30, "gender": "male"}
        )
        original = ProgramEngine(store).resolve(m)
        reloaded = ProgramEngine(load_rule_store(path)).resolve(m)
        assert original == reloaded
        assert reloaded.program_code == "P4"
