"""Unit tests for metrics service."""

import pytest

from outbreak_sim.schemas import OutcomeKind, OutcomeRecord, OutpostRateConfig
from outbreak_sim.schemas.columns import ColumnNames
from outbreak_sim.services.metrics import (
    calculate_run_metrics,
    count_fully_infected,
    count_saved,
    mean_infection,
    provinces_dataframe,
    win_day_in_target,
)


def test_counts_and_mean(province_snapshot_factory) -> None:
    provinces = [
        province_snapshot_factory("A", 0.2),
        province_snapshot_factory("B", 1.0),
        province_snapshot_factory("C", 0.6),
    ]
    assert count_fully_infected(provinces) == 1
    assert count_saved(provinces) == 2
    assert mean_infection(provinces) == pytest.approx(0.6)


def test_mean_infection_empty() -> None:
    assert mean_infection([]) == 0.0


def test_provinces_dataframe(province_snapshot_factory) -> None:
    df = provinces_dataframe(
        [province_snapshot_factory("A", 0.2, outpost_count=2), province_snapshot_factory("B", 0.5)]
    )
    assert list(df.index) == ["A", "B"]
    assert df.loc["A", ColumnNames.OUTPOST_COUNT] == 2
    assert df.loc["B", ColumnNames.INFECTION] == 0.5


def test_win_day_in_target(scenario_config_factory) -> None:
    config = scenario_config_factory(
        outpost=OutpostRateConfig(target_win_day_min=10, target_win_day_max=14)
    )
    assert win_day_in_target(OutcomeRecord(kind=OutcomeKind.VICTORY, day_index=12), config)
    assert win_day_in_target(OutcomeRecord(kind=OutcomeKind.VICTORY, day_index=14), config)
    assert not win_day_in_target(OutcomeRecord(kind=OutcomeKind.VICTORY, day_index=9), config)
    assert not win_day_in_target(OutcomeRecord(kind=OutcomeKind.DEFEAT, day_index=12), config)


def test_calculate_run_metrics_empty(basic_config) -> None:
    metrics = calculate_run_metrics([], OutcomeRecord(), basic_config)
    assert metrics.outcome is OutcomeKind.NONE
    assert metrics.final_day == 0
    assert metrics.win_day_in_target is False


def test_calculate_run_metrics(
    basic_config, step_record_factory, global_snapshot_factory, province_snapshot_factory
) -> None:
    steps = [
        step_record_factory(step=1, day_index=1),
        step_record_factory(
            step=2,
            day_index=2,
            global_state=global_snapshot_factory(
                cure_progress=0.4, total_outpost_count=2, currency_balance=152
            ),
            provinces=[
                province_snapshot_factory("A", 0.3),
                province_snapshot_factory("B", 0.5),
            ],
        ),
    ]
    outcome = OutcomeRecord(kind=OutcomeKind.DEFEAT, day_index=2)

    metrics = calculate_run_metrics(steps, outcome, basic_config)

    assert metrics.outcome is OutcomeKind.DEFEAT
    assert metrics.final_day == 2
    assert metrics.final_cure_progress == 0.4
    assert metrics.peak_mean_infection == pytest.approx(0.4)
    assert metrics.total_outposts_built == 2
    assert metrics.currency_spent == 48
    assert metrics.win_day_in_target is False
