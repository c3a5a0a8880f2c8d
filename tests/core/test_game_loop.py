"""Tests for the pure game loop step."""

import pytest

from outbreak_sim.core.game_loop import (
    active_slots,
    effective_global_factor,
    evaluate_terminal,
    execute_step,
)
from outbreak_sim.core.state import GlobalState, ProvinceState, RegionId
from outbreak_sim.schemas import OutcomeKind, OutpostRateConfig, VirusRateConfig


def province(region_id: str, infection: float, sequences=(), is_bonus: bool = False):
    p = ProvinceState(RegionId(region_id), infection=infection, is_bonus=is_bonus)
    for seq in sequences:
        p.add_outpost(seq)
    return p


def test_active_slots_follow_global_build_order() -> None:
    a = province("A", 0.1, sequences=(0, 3))
    b = province("B", 0.1, sequences=(1,))
    c = province("C", 0.9, sequences=(2,))
    c.disabled = True

    slots = active_slots([b, a, c])
    assert [(seq, region) for seq, region, _ in slots] == [(0, "A"), (1, "B"), (3, "A")]


def test_active_slots_tie_break_by_region_id() -> None:
    b = province("B", 0.1, sequences=(0,))
    a = province("A", 0.1, sequences=(0,))
    assert [region for _, region, _ in active_slots([b, a])] == ["A", "B"]


def test_effective_factor_applies_diminishing_returns_and_bonus() -> None:
    a = province("A", 0.1, sequences=(0,))
    b = province("B", 0.1, sequences=(1,), is_bonus=True)
    c = province("C", 0.1, sequences=(2,))

    factor = effective_global_factor([a, b, c], diminishing_factor=0.5, bonus_multiplier=2.0)
    # 1.0 + 0.5 * 2.0 + 0.25
    assert factor == pytest.approx(2.25)


def test_effective_factor_zero_without_active_outposts() -> None:
    assert effective_global_factor([province("A", 0.1)], 0.5, 2.0) == 0.0


def test_step_infection_growth_scenario(basic_config) -> None:
    """No outposts, day 1, one hour: infection rises by exactly the base rate."""
    a = province("A", 0.1)
    state = GlobalState()
    outcome = execute_step([a], state, basic_config, delta_hours=1.0, day_index=1)

    assert a.infection == pytest.approx(0.1 + 0.0125)
    assert outcome.virus_strength == 1.0
    assert outcome.changed_regions == ["A"]
    assert state.cure_progress == 0.0


def test_step_virus_strength_on_later_day(basic_config) -> None:
    a = province("A", 0.1)
    execute_step([a], GlobalState(), basic_config, delta_hours=1.0, day_index=3)
    assert a.infection == pytest.approx(0.1 + 0.0125 * 1.12)


def test_step_global_cure_uses_active_outposts(basic_config) -> None:
    a = province("A", 0.1, sequences=(0,))
    b = province("B", 0.1, sequences=(1,))
    state = GlobalState()

    outcome = execute_step([a, b], state, basic_config, delta_hours=2.0, day_index=1)

    # slots: 1.0 + 0.5, rate 0.01/h, 2 hours
    assert outcome.effective_factor == pytest.approx(1.5)
    assert state.cure_progress == pytest.approx(0.01 * 1.5 * 2.0)
    assert state.total_outpost_count == 2
    assert state.active_outpost_count == 2
    assert outcome.global_changed is True


def test_zero_delta_changes_nothing(basic_config) -> None:
    a = province("A", 0.1, sequences=(0,))
    state = GlobalState()
    state.recompute_counts([a])

    outcome = execute_step([a], state, basic_config, delta_hours=0.0, day_index=1)
    assert outcome.changed_regions == []
    assert outcome.global_changed is False


def test_evaluate_terminal_victory_beats_defeat() -> None:
    a = province("A", 1.0)
    a.fully_infected = True
    state = GlobalState(cure_progress=1.0)
    assert evaluate_terminal([a], state) is OutcomeKind.VICTORY


def test_evaluate_terminal_defeat_requires_every_province() -> None:
    a = province("A", 1.0)
    a.fully_infected = True
    b = province("B", 0.5)
    state = GlobalState(cure_progress=0.2)
    assert evaluate_terminal([a, b], state) is OutcomeKind.NONE

    b.fully_infected = True
    assert evaluate_terminal([a, b], state) is OutcomeKind.DEFEAT


def test_disable_and_reenable_scenario(scenario_config_factory) -> None:
    """0.79 with one active outpost crosses 0.8 and is disabled; dropping back re-enables."""
    config = scenario_config_factory(
        virus=VirusRateConfig(
            base_infection_per_hour=0.03,
            daily_virus_growth=0.0,
            outpost_disable_threshold=0.8,
            fully_infected_threshold=0.99,
        ),
        outpost=OutpostRateConfig(local_cure_per_hour=0.01, bonus_region_ids=()),
    )
    a = province("A", 0.79, sequences=(0,))
    state = GlobalState()

    outcome = execute_step([a], state, config, delta_hours=1.0, day_index=1)
    assert a.infection == pytest.approx(0.81)
    assert a.disabled is True
    assert state.active_outpost_count == 0
    assert outcome.changed_regions == ["A"]

    # Still above the threshold: stays disabled, no local cure applied
    execute_step([a], state, config, delta_hours=1.0, day_index=1)
    assert a.disabled is True
    assert a.infection == pytest.approx(0.84)

    # Infection brought back under the threshold: the next step re-enables
    a.infection = 0.7
    execute_step([a], state, config, delta_hours=0.0, day_index=1)
    assert a.disabled is False
    assert state.active_outpost_count == 1
