"""Automated build policies for headless runs.

A policy stands in for the player: before each tick it may issue build
requests through the engine's public API.  Policies never touch engine
internals, so every build they make goes through the same legality checks
as a click in the UI would.
"""

import logging
from typing import Callable, Protocol

from outbreak_sim.core.engine import OutbreakEngine

logger = logging.getLogger(__name__)


class BuildPolicy(Protocol):
    """Protocol for a build policy."""

    def choose_builds(self, engine: OutbreakEngine) -> list[str]:
        """Issue builds on *engine* and return the regions that got one."""
        ...


class NoBuildPolicy:
    """Never builds. Useful for measuring raw outbreak speed."""

    def choose_builds(self, engine: OutbreakEngine) -> list[str]:
        return []


class GreedyBuildPolicy:
    """Build where infection is lowest, bonus regions first on ties.

    Attributes:
        max_builds_per_tick: Upper bound on builds issued per call.
        reserve: Currency that must remain after a build.
    """

    def __init__(self, max_builds_per_tick: int = 1, reserve: int = 0) -> None:
        self.max_builds_per_tick = max_builds_per_tick
        self.reserve = reserve

    def _ranked_candidates(self, engine: OutbreakEngine) -> list[str]:
        bonus_ids = engine.config.bonus_region_ids()
        provinces = engine.get_all_provinces()
        ranked = sorted(
            provinces,
            key=lambda p: (p.infection, p.region_id not in bonus_ids, p.region_id),
        )
        return [p.region_id for p in ranked]

    def choose_builds(self, engine: OutbreakEngine) -> list[str]:
        built: list[str] = []
        for _ in range(self.max_builds_per_tick):
            balance = engine.get_global_state().currency_balance
            target = None
            for region_id in self._ranked_candidates(engine):
                preview = engine.can_build_outpost(region_id)
                if preview.success and balance - preview.cost >= self.reserve:
                    target = region_id
                    break
            if target is None:
                break
            result = engine.try_build_outpost(target)
            if not result.success:
                break
            built.append(target)
        if built:
            logger.debug(f"Policy built in: {', '.join(built)}")
        return built


DEFAULT_POLICY = "greedy"

POLICIES: dict[str, Callable[[], BuildPolicy]] = {
    "greedy": GreedyBuildPolicy,
    "none": NoBuildPolicy,
}


def make_policy(name: str) -> BuildPolicy:
    """Build the policy registered under *name*.

    Raises:
        ValueError: If no policy has that name.
    """
    try:
        factory = POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown policy '{name}', expected one of {sorted(POLICIES)}"
        ) from None
    return factory()
