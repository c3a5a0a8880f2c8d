"""Centralized metrics calculation for simulation data.

This module provides pure functions to calculate derived metrics (saved
provinces, mean infection, etc.) from province snapshots, ensuring
consistency between live runs, the end-state summary and exported reports.
"""

from typing import List

import pandas as pd

from outbreak_sim.schemas.columns import ColumnNames
from outbreak_sim.schemas.config import ScenarioConfig
from outbreak_sim.schemas.data import (
    OutcomeKind,
    OutcomeRecord,
    ProvinceSnapshot,
    RunMetrics,
    StepRecord,
)


def count_fully_infected(provinces: List[ProvinceSnapshot]) -> int:
    return sum(1 for p in provinces if p.fully_infected)


def count_saved(provinces: List[ProvinceSnapshot]) -> int:
    """Provinces that are not fully infected."""
    return len(provinces) - count_fully_infected(provinces)


def mean_infection(provinces: List[ProvinceSnapshot]) -> float:
    """Calculate the mean infection level (0.0 to 1.0)."""
    if not provinces:
        return 0.0
    return sum(p.infection for p in provinces) / len(provinces)


def provinces_dataframe(provinces: List[ProvinceSnapshot]) -> pd.DataFrame:
    """Tabulate province snapshots, one row per region, indexed by region id."""
    columns = [
        ColumnNames.REGION_ID,
        ColumnNames.INFECTION,
        ColumnNames.OUTPOST_COUNT,
        ColumnNames.DISABLED,
        ColumnNames.FULLY_INFECTED,
    ]
    df = pd.DataFrame([p.model_dump() for p in provinces], columns=columns)
    return df.set_index(ColumnNames.REGION_ID)


def win_day_in_target(outcome: OutcomeRecord, config: ScenarioConfig) -> bool:
    """Whether a victory landed inside the configured balancing window."""
    if outcome.kind is not OutcomeKind.VICTORY:
        return False
    window = config.outpost
    return window.target_win_day_min <= outcome.day_index <= window.target_win_day_max


def calculate_run_metrics(
    steps: List[StepRecord], outcome: OutcomeRecord, config: ScenarioConfig
) -> RunMetrics:
    """Calculate aggregate run metrics from a list of steps.

    Args:
        steps: StepRecord objects in tick order.
        outcome: Terminal outcome (kind NONE if the run timed out).
        config: Scenario the run was played with.

    Returns:
        RunMetrics object.
    """
    if not steps:
        return RunMetrics(
            outcome=outcome.kind,
            final_cure_progress=0.0,
            final_day=0,
            peak_mean_infection=0.0,
            total_outposts_built=0,
            currency_spent=0,
            win_day_in_target=False,
        )

    last_step = steps[-1]
    final_global = last_step.global_state
    peak = max(mean_infection(s.provinces) for s in steps)

    return RunMetrics(
        outcome=outcome.kind,
        final_cure_progress=final_global.cure_progress,
        final_day=last_step.day_index,
        peak_mean_infection=peak,
        total_outposts_built=final_global.total_outpost_count,
        currency_spent=config.starting_currency - final_global.currency_balance,
        win_day_in_target=win_day_in_target(outcome, config),
    )
