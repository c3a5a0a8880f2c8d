"""Tests for the pure outbreak math functions."""

import pytest

from outbreak_sim.core.outbreak_math import (
    build_cost,
    clamp01,
    global_multiplier,
    virus_strength,
)
from outbreak_sim.schemas import OutpostCostConfig


@pytest.mark.parametrize("n", [0, 1, 2, 5, 17, 100])
def test_build_cost_is_linear(n: int) -> None:
    """cost(n) = base + per_existing * n exactly."""
    cfg = OutpostCostConfig(base_cost=20, cost_per_existing_outpost=8)
    assert build_cost(n, cfg) == 20 + 8 * n


def test_build_cost_scenario_values() -> None:
    """First outpost costs 20, the second 28."""
    cfg = OutpostCostConfig(base_cost=20, cost_per_existing_outpost=8)
    assert build_cost(0, cfg) == 20
    assert build_cost(1, cfg) == 28


def test_build_cost_negative_count_treated_as_zero() -> None:
    cfg = OutpostCostConfig(base_cost=20, cost_per_existing_outpost=8)
    assert build_cost(-3, cfg) == 20


def test_global_multiplier_first_outpost_is_full() -> None:
    assert global_multiplier(0, 0.85) == 1.0
    assert global_multiplier(-1, 0.85) == 1.0


@pytest.mark.parametrize("factor", [0.1, 0.5, 0.85, 0.99])
def test_global_multiplier_is_power_and_non_increasing(factor: float) -> None:
    previous = global_multiplier(0, factor)
    for i in range(1, 30):
        current = global_multiplier(i, factor)
        assert current == pytest.approx(factor**i)
        assert current <= previous
        previous = current


def test_global_multiplier_factor_one_never_discounts() -> None:
    assert all(global_multiplier(i, 1.0) == 1.0 for i in range(10))


def test_virus_strength_ramps_linearly() -> None:
    assert virus_strength(1, 0.06) == 1.0
    assert virus_strength(2, 0.06) == pytest.approx(1.06)
    assert virus_strength(11, 0.06) == pytest.approx(1.6)


@pytest.mark.parametrize(
    "value, expected", [(-0.5, 0.0), (0.0, 0.0), (0.42, 0.42), (1.0, 1.0), (3.0, 1.0)]
)
def test_clamp01(value: float, expected: float) -> None:
    assert clamp01(value) == expected
