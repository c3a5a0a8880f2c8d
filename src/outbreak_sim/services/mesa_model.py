"""Mesa model integration for the Outbreak Cure Simulator."""

import logging

import mesa

from outbreak_sim.core.engine import OutbreakEngine
from outbreak_sim.core.events import EventBus, ProvinceChanged
from outbreak_sim.core.outcome import OutcomeRecorder
from outbreak_sim.schemas import ProvinceSnapshot, ScenarioConfig
from outbreak_sim.schemas.defaults import MINUTES_PER_DAY
from outbreak_sim.services.data_collect import (
    compute_active_outposts,
    compute_cure_progress,
    compute_currency,
    compute_fully_infected,
    compute_mean_infection,
    compute_total_outposts,
)
from outbreak_sim.services.policies import BuildPolicy, NoBuildPolicy

logger = logging.getLogger(__name__)


class ProvinceAgent(mesa.Agent):
    """Mesa mirror of one province.

    The engine owns the authoritative state; this agent only holds the
    latest snapshot so Mesa's DataCollector can report per-province series.

    Attributes:
        region_id: Stable region identifier.
        infection: Infection level after the last tick.
        outpost_count: Outposts built in this province.
        disabled: Whether outposts are switched off.
        fully_infected: Whether the province is lost.
    """

    def __init__(self, model: mesa.Model, region_id: str) -> None:
        super().__init__(model)
        self.region_id = region_id
        self.infection: float = 0.0
        self.outpost_count: int = 0
        self.disabled: bool = False
        self.fully_infected: bool = False

    def sync(self, snapshot: ProvinceSnapshot) -> None:
        self.infection = snapshot.infection
        self.outpost_count = snapshot.outpost_count
        self.disabled = snapshot.disabled
        self.fully_infected = snapshot.fully_infected

    def step(self) -> None:
        """No-op: the model drives the engine, agents only mirror state."""


class OutbreakModel(mesa.Model):
    """The central Mesa model.

    Acts as the external clock for the engine: every step advances
    ``clock.minutes_per_step`` in-game minutes and derives the day index
    from the total elapsed time.  A BuildPolicy plays the player's role.
    """

    def __init__(
        self,
        config: ScenarioConfig | None = None,
        policy: BuildPolicy | None = None,
        **kwargs,
    ) -> None:
        """Initialize the model.

        Args:
            config: Full scenario configuration.
            policy: Build policy applied before each tick.
            **kwargs: Overrides for configuration parameters, nested with
                ``__`` (e.g. ``virus__daily_virus_growth=0.1``).

        Raises:
            ValueError: If the engine rejects the scenario setup.
        """
        if config is None:
            config = ScenarioConfig(name="Default")

        # Apply kwargs overrides (nested update support)
        if kwargs:
            config_dict = config.model_dump()
            for key, value in kwargs.items():
                parts = key.split("__")
                target = config_dict
                for part in parts[:-1]:
                    target = target.setdefault(part, {})
                target[parts[-1]] = value
            config = ScenarioConfig.model_validate(config_dict)

        super().__init__(seed=config.seed)
        self.config = config
        self.policy = policy or NoBuildPolicy()
        self.running = True

        self.bus = EventBus()
        self.recorder = OutcomeRecorder()
        # Pass self.random (Mesa's seeded RNG) for reproducible seeding
        self.engine = OutbreakEngine(
            config, bus=self.bus, recorder=self.recorder, rng=self.random
        )
        init = self.engine.initialize()
        if not init.ok:
            raise ValueError(f"Invalid scenario '{config.name}': {init.message}")

        self.elapsed_minutes: float = 0.0
        self.tick_count: int = 0
        self.last_builds: list[str] = []

        self._agents_by_region: dict[str, ProvinceAgent] = {}
        for snapshot in self.engine.get_all_provinces():
            agent = ProvinceAgent(self, snapshot.region_id)
            agent.sync(snapshot)
            self._agents_by_region[snapshot.region_id] = agent
        self.bus.subscribe(self._on_province_changed, ProvinceChanged)

        self.datacollector = mesa.DataCollector(
            model_reporters={
                "Cure_Progress": compute_cure_progress,
                "Mean_Infection": compute_mean_infection,
                "Active_Outposts": compute_active_outposts,
                "Total_Outposts": compute_total_outposts,
                "Currency": compute_currency,
                "Provinces_Fully_Infected": compute_fully_infected,
            },
            agent_reporters={
                "Region": "region_id",
                "Infection": "infection",
                "Outposts": "outpost_count",
                "Disabled": "disabled",
            },
        )

    def _on_province_changed(self, event: ProvinceChanged) -> None:
        self._agents_by_region[event.province.region_id].sync(event.province)

    @property
    def day_index(self) -> int:
        """Day of the next tick (1-based)."""
        return 1 + int(self.elapsed_minutes // MINUTES_PER_DAY)

    @property
    def elapsed_hours(self) -> float:
        return self.elapsed_minutes / 60.0

    def step(self) -> None:
        """Apply the build policy, then advance the engine one clock tick."""
        if not self.running:
            return

        day_index = self.day_index
        self.last_builds = self.policy.choose_builds(self.engine)

        minutes = self.config.clock.minutes_per_step
        result = self.engine.advance_minutes(minutes, day_index)
        if not result.ok:
            logger.error(f"Tick rejected by engine: {result.error}")
            self.running = False
            return

        self.elapsed_minutes += minutes
        self.tick_count += 1
        self.datacollector.collect(self)

        if self.engine.is_terminal:
            logger.info(f"Run ended with {self.engine.outcome_kind.value} on day {day_index}")
            self.running = False
        elif self.elapsed_minutes >= self.config.clock.max_days * MINUTES_PER_DAY:
            logger.info(f"Day limit ({self.config.clock.max_days}) reached without outcome")
            self.running = False

    def get_province_snapshots(self) -> list[ProvinceSnapshot]:
        """Capture standard view of province state for UI/Data collection."""
        return self.engine.get_all_provinces()
