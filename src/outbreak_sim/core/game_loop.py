"""Core game loop: pure business logic for one simulation tick.

Orchestrates the tick sequence:
    1. Virus strength for the current day
    2. Per-province infection, local cure, disable gate, fully-infected flag
    3. Global cure aggregation with diminishing returns by build order
    4. Aggregate outpost counts
    5. Terminal condition evaluation

All functions operate on core state objects (ProvinceState, GlobalState)
with zero framework dependencies (no Mesa).  Latching the outcome and
emitting notifications is the engine's job.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from outbreak_sim.core.outbreak_math import clamp01, global_multiplier, virus_strength
from outbreak_sim.core.state import GlobalState, ProvinceState
from outbreak_sim.schemas import OutcomeKind, OutcomeRecord, ScenarioConfig


@dataclass
class StepOutcome:
    """Aggregate results from one tick of the game loop."""

    virus_strength: float = 1.0
    effective_factor: float = 0.0  # sum of active slot multipliers
    changed_regions: list[str] = field(default_factory=list)
    global_changed: bool = False
    terminal: OutcomeKind = OutcomeKind.NONE


def active_slots(provinces: list[ProvinceState]) -> list[tuple[int, str, bool]]:
    """One slot per active outpost, in global build order.

    Returns:
        ``(sequence, region_id, is_bonus)`` tuples sorted by sequence, ties
        broken by region id.
    """
    slots = [
        (sequence, province.region_id, province.is_bonus)
        for province in provinces
        if province.is_active
        for sequence in province.build_sequence
    ]
    slots.sort(key=lambda slot: (slot[0], slot[1]))
    return slots


def effective_global_factor(
    provinces: list[ProvinceState],
    diminishing_factor: float,
    bonus_multiplier: float,
) -> float:
    """Sum of discounted (and bonus-scaled) multipliers over active outposts."""
    total = 0.0
    for index, (_, _, is_bonus) in enumerate(active_slots(provinces)):
        multiplier = global_multiplier(index, diminishing_factor)
        if is_bonus:
            multiplier *= bonus_multiplier
        total += multiplier
    return total


def tick_is_finite(
    provinces: list[ProvinceState],
    config: ScenarioConfig,
    delta_hours: float,
    day_index: int,
) -> bool:
    """Whether every rate x hours increment of this tick is a finite number.

    Checks upper bounds: the full local cure of the most built-up province
    and the undiscounted, bonus-scaled cure of every outpost.
    """
    virus = config.virus
    outpost = config.outpost
    strength = virus_strength(day_index, virus.daily_virus_growth)
    most_outposts = max((p.outpost_count for p in provinces), default=0)
    total_outposts = sum(p.outpost_count for p in provinces)
    increments = (
        virus.base_infection_per_hour * strength * delta_hours,
        outpost.local_cure_per_hour * most_outposts * delta_hours,
        outpost.global_cure_per_hour_per_outpost
        * total_outposts
        * max(1.0, outpost.bonus_multiplier)
        * delta_hours,
    )
    return all(math.isfinite(value) for value in increments)


def evaluate_terminal(
    provinces: list[ProvinceState], global_state: GlobalState
) -> OutcomeKind:
    """Victory beats defeat when both hold on the same tick."""
    if global_state.cure_progress >= 1.0:
        return OutcomeKind.VICTORY
    if provinces and all(p.fully_infected for p in provinces):
        return OutcomeKind.DEFEAT
    return OutcomeKind.NONE


def build_outcome_record(
    kind: OutcomeKind,
    provinces: list[ProvinceState],
    global_state: GlobalState,
    day_index: int,
) -> OutcomeRecord:
    """Snapshot the statistics that produced a terminal outcome."""
    fully_infected = sum(1 for p in provinces if p.fully_infected)
    return OutcomeRecord(
        kind=kind,
        cure_progress=global_state.cure_progress,
        day_index=day_index,
        active_outpost_count=global_state.active_outpost_count,
        total_outpost_count=global_state.total_outpost_count,
        currency_balance=global_state.currency_balance,
        provinces_saved=len(provinces) - fully_infected,
        provinces_fully_infected=fully_infected,
    )


def execute_step(
    provinces: list[ProvinceState],
    global_state: GlobalState,
    config: ScenarioConfig,
    delta_hours: float,
    day_index: int,
) -> StepOutcome:
    """Execute one tick of the simulation game loop.

    Args:
        provinces: Province state objects (mutated in place).
        global_state: Aggregate state (mutated in place).
        config: Full scenario configuration.
        delta_hours: Elapsed in-game hours (>= 0, validated by the caller).
        day_index: Current day (>= 1, validated by the caller).

    Returns:
        StepOutcome describing what changed and any terminal condition.
    """
    virus = config.virus
    outpost = config.outpost
    outcome = StepOutcome()

    before_provinces = {p.region_id: p.key() for p in provinces}
    before_global = global_state.key()

    # ------------------------------------------------------------------
    # Phase 1: Virus strength
    # ------------------------------------------------------------------
    outcome.virus_strength = virus_strength(day_index, virus.daily_virus_growth)
    infection_delta = virus.base_infection_per_hour * outcome.virus_strength * delta_hours

    # ------------------------------------------------------------------
    # Phase 2: Provinces (independent, order does not matter)
    # ------------------------------------------------------------------
    for province in provinces:
        province.apply_infection(infection_delta, outpost.local_cure_per_hour, delta_hours)
        province.update_disabled(virus.outpost_disable_threshold)
        province.update_fully_infected(virus.fully_infected_threshold)

    # ------------------------------------------------------------------
    # Phase 3: Global cure
    # ------------------------------------------------------------------
    outcome.effective_factor = effective_global_factor(
        provinces, outpost.diminishing_return_factor, outpost.bonus_multiplier
    )
    global_state.cure_progress = clamp01(
        global_state.cure_progress
        + outpost.global_cure_per_hour_per_outpost * outcome.effective_factor * delta_hours
    )

    # ------------------------------------------------------------------
    # Phase 4: Aggregates
    # ------------------------------------------------------------------
    global_state.recompute_counts(provinces)

    outcome.changed_regions = [
        p.region_id for p in provinces if p.key() != before_provinces[p.region_id]
    ]
    outcome.global_changed = global_state.key() != before_global

    # ------------------------------------------------------------------
    # Phase 5: Terminal check (latching is up to the caller)
    # ------------------------------------------------------------------
    outcome.terminal = evaluate_terminal(provinces, global_state)
    return outcome
