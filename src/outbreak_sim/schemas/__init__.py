"""Schemas package.

- config.py: Configuration models (ScenarioConfig, VirusRateConfig, etc.)
- data.py: Simulation data models (ProvinceSnapshot, OutcomeRecord, SimulationRun, etc.)
"""

from .config import (
    ClockConfig,
    InfectionSeedConfig,
    OutpostCostConfig,
    OutpostRateConfig,
    RegionSpec,
    ScenarioConfig,
    VirusRateConfig,
)
from .data import (
    GlobalSnapshot,
    OutcomeKind,
    OutcomeRecord,
    ProvinceSnapshot,
    RunMetrics,
    SimulationRun,
    StepRecord,
)

__all__ = [
    "ClockConfig",
    "InfectionSeedConfig",
    "OutpostCostConfig",
    "OutpostRateConfig",
    "RegionSpec",
    "ScenarioConfig",
    "VirusRateConfig",
    "GlobalSnapshot",
    "OutcomeKind",
    "OutcomeRecord",
    "ProvinceSnapshot",
    "RunMetrics",
    "SimulationRun",
    "StepRecord",
]
