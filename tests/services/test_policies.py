"""Tests for the automated build policies."""

from outbreak_sim.core.engine import OutbreakEngine
from outbreak_sim.schemas import OutpostRateConfig, RegionSpec
from outbreak_sim.services.policies import GreedyBuildPolicy, NoBuildPolicy


def test_no_build_policy_never_builds(engine: OutbreakEngine) -> None:
    assert NoBuildPolicy().choose_builds(engine) == []
    assert engine.get_global_state().total_outpost_count == 0


def test_greedy_prefers_bonus_region_on_ties(scenario_config_factory) -> None:
    config = scenario_config_factory(
        regions=("A", "B", "C"),
        outpost=OutpostRateConfig(bonus_region_ids=("C",)),
    )
    engine = OutbreakEngine(config)
    engine.initialize()

    assert GreedyBuildPolicy().choose_builds(engine) == ["C"]


def test_greedy_picks_lowest_infection(basic_config) -> None:
    engine = OutbreakEngine(basic_config)
    engine.initialize([RegionSpec(region_id="A"), RegionSpec(region_id="B")])
    engine.try_build_outpost("B")
    engine.advance(1.0, 1)  # B is cured locally, A keeps growing

    assert GreedyBuildPolicy().choose_builds(engine) == ["B"]


def test_greedy_respects_budget_and_reserve(basic_config) -> None:
    engine = OutbreakEngine(basic_config)
    engine.initialize(starting_currency=60)

    # 20 + 28 = 48 leaves 12; the next (36) is unaffordable
    built = GreedyBuildPolicy(max_builds_per_tick=5).choose_builds(engine)
    assert len(built) == 2
    assert engine.get_global_state().currency_balance == 12

    engine = OutbreakEngine(basic_config)
    engine.initialize(starting_currency=60)
    built = GreedyBuildPolicy(max_builds_per_tick=5, reserve=30).choose_builds(engine)
    assert len(built) == 1
    assert engine.get_global_state().currency_balance == 40


def test_greedy_skips_fully_infected(scenario_config_factory) -> None:
    engine = OutbreakEngine(scenario_config_factory(seed_infection=0.995))
    engine.initialize()
    assert GreedyBuildPolicy().choose_builds(engine) == []
