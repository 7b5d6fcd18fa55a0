"""Shared test fixtures: seeded rule stores, engines, sample measurements."""

from __future__ import annotations

import pytest

from program_engine.engine import ProgramEngine
from program_engine.models.enums import Sex
from program_engine.models.measurement import Measurement
from program_engine.store.memory import InMemoryRuleStore


@pytest.fixture
def seeded_store() -> InMemoryRuleStore:
    """Store seeded with the ten canonical rules and programs P1-P10."""
    return InMemoryRuleStore.from_rule_table()


@pytest.fixture
def engine(seeded_store: InMemoryRuleStore) -> ProgramEngine:
    return ProgramEngine(seeded_store)


@pytest.fixture
def lean_male() -> Measurement:
    """55 kg, 175 cm, 8% → BMI 17.96, Underweight x Low."""
    return Measurement(weight_kg=55.0, height_cm=175.0, body_fat_percent=8.0, sex=Sex.MALE)


@pytest.fixture
def obese_female() -> Measurement:
    """90 kg, 160 cm, 35% → BMI 35.16, Obese x High."""
    return Measurement(weight_kg=90.0, height_cm=160.0, body_fat_percent=35.0, sex=Sex.FEMALE)


@pytest.fixture
def muscular_male() -> Measurement:
    """110 kg, 180 cm, 8% → BMI 33.95, Obese x Low (impossible)."""
    return Measurement(weight_kg=110.0, height_cm=180.0, body_fat_percent=8.0, sex=Sex.MALE)


@pytest.fixture
def ideal_female() -> Measurement:
    """60 kg, 165 cm, 25% → BMI 22.04, Ideal x Normal."""
    return Measurement(weight_kg=60.0, height_cm=165.0, body_fat_percent=25.0, sex=Sex.FEMALE)
