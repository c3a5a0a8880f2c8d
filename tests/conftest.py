"""Shared test fixtures."""

from typing import Callable

import pytest
from factories import (
    create_global_snapshot,
    create_province_snapshot,
    create_scenario_config,
    create_step_record,
)

from outbreak_sim.core.engine import OutbreakEngine
from outbreak_sim.core.events import EventBus
from outbreak_sim.schemas import (
    GlobalSnapshot,
    ProvinceSnapshot,
    ScenarioConfig,
    StepRecord,
)


@pytest.fixture
def province_snapshot_factory() -> Callable[..., ProvinceSnapshot]:
    """Fixture that returns the province snapshot factory function."""
    return create_province_snapshot


@pytest.fixture
def global_snapshot_factory() -> Callable[..., GlobalSnapshot]:
    return create_global_snapshot


@pytest.fixture
def step_record_factory() -> Callable[..., StepRecord]:
    return create_step_record


@pytest.fixture
def scenario_config_factory() -> Callable[..., ScenarioConfig]:
    """Fixture that returns the scenario config factory function."""
    return create_scenario_config


@pytest.fixture
def basic_config() -> ScenarioConfig:
    """Two regions {A, B}, fixed 0.1 seed, 200 currency, cost 20 + 8n."""
    return create_scenario_config()


@pytest.fixture
def bus() -> EventBus:
    return EventBus(keep_history=True)


@pytest.fixture
def engine(basic_config: ScenarioConfig, bus: EventBus) -> OutbreakEngine:
    """Return an initialized engine with a polling event bus."""
    eng = OutbreakEngine(basic_config, bus=bus)
    assert eng.initialize().ok
    bus.drain()
    return eng
