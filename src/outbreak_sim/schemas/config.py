"""Configuration schemas for the simulation."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from outbreak_sim.schemas.defaults import (
    BONUS_TAG,
    DEFAULT_BASE_INFECTION_PER_HOUR,
    DEFAULT_BONUS_MULTIPLIER,
    DEFAULT_BONUS_REGION_IDS,
    DEFAULT_DAILY_VIRUS_GROWTH,
    DEFAULT_DIMINISHING_RETURN_FACTOR,
    DEFAULT_FULLY_INFECTED_THRESHOLD,
    DEFAULT_GLOBAL_CURE_PER_HOUR_PER_OUTPOST,
    DEFAULT_LOCAL_CURE_PER_HOUR,
    DEFAULT_MAX_DAYS,
    DEFAULT_MINUTES_PER_STEP,
    DEFAULT_OUTPOST_BASE_COST,
    DEFAULT_OUTPOST_COST_PER_EXISTING,
    DEFAULT_OUTPOST_DISABLE_THRESHOLD,
    DEFAULT_REGIONS,
    DEFAULT_SEED_INFECTION_MAX,
    DEFAULT_SEED_INFECTION_MIN,
    DEFAULT_STARTING_CURRENCY,
    DEFAULT_TARGET_WIN_DAY_MAX,
    DEFAULT_TARGET_WIN_DAY_MIN,
)


class VirusRateConfig(BaseModel):
    """Configuration for the virus (The Outbreak).

    Infection grows every hour in every province:
        strength = 1 + daily_virus_growth × (day_index - 1)
        delta    = base_infection_per_hour × strength × hours

    Two thresholds act on the resulting per-province level:
       - outpost_disable_threshold: outposts stop curing at/above this level
         and resume once infection falls back under it (hysteresis gate)
       - fully_infected_threshold: province is lost, no new construction,
         and counts toward the defeat condition
    """

    base_infection_per_hour: float = Field(
        DEFAULT_BASE_INFECTION_PER_HOUR,
        gt=0,
        description="Infection added per hour on day 1",
    )
    daily_virus_growth: float = Field(
        DEFAULT_DAILY_VIRUS_GROWTH,
        ge=0,
        description="Linear increase of virus strength per elapsed day",
    )
    outpost_disable_threshold: float = Field(
        DEFAULT_OUTPOST_DISABLE_THRESHOLD,
        gt=0,
        le=1,
        description="Infection level at which outposts are disabled",
    )
    fully_infected_threshold: float = Field(
        DEFAULT_FULLY_INFECTED_THRESHOLD,
        gt=0,
        le=1,
        description="Infection level at which a province counts as lost",
    )

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class OutpostRateConfig(BaseModel):
    """Configuration for cure outposts (The Response).

    Each active outpost cures its own province at ``local_cure_per_hour`` and
    feeds the global cure meter.  Global contributions are ranked by global
    build order and discounted geometrically:
        multiplier(i) = diminishing_return_factor ^ i   (i = 0, 1, 2, ...)
    Outposts in bonus regions have their multiplier scaled by
    ``bonus_multiplier``.
    """

    local_cure_per_hour: float = Field(
        DEFAULT_LOCAL_CURE_PER_HOUR,
        ge=0,
        description="Infection removed per hour per active outpost (own province)",
    )
    global_cure_per_hour_per_outpost: float = Field(
        DEFAULT_GLOBAL_CURE_PER_HOUR_PER_OUTPOST,
        ge=0,
        description="Cure progress per hour contributed by an undiscounted outpost",
    )
    diminishing_return_factor: float = Field(
        DEFAULT_DIMINISHING_RETURN_FACTOR,
        gt=0,
        le=1,
        description="Geometric discount applied to each successive outpost",
    )
    bonus_region_ids: tuple[str, ...] = Field(
        DEFAULT_BONUS_REGION_IDS,
        description="Regions whose outposts receive the bonus multiplier",
    )
    bonus_multiplier: float = Field(
        DEFAULT_BONUS_MULTIPLIER,
        gt=0,
        description="Global contribution multiplier for bonus regions",
    )
    target_win_day_min: float = Field(
        DEFAULT_TARGET_WIN_DAY_MIN,
        gt=0,
        description="Earliest day a balanced run is expected to be won",
    )
    target_win_day_max: float = Field(
        DEFAULT_TARGET_WIN_DAY_MAX,
        gt=0,
        description="Latest day a balanced run is expected to be won",
    )

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @model_validator(mode="after")
    def _check_target_window(self) -> "OutpostRateConfig":
        if self.target_win_day_min > self.target_win_day_max:
            raise ValueError("target_win_day_min must not exceed target_win_day_max")
        return self


class OutpostCostConfig(BaseModel):
    """Configuration for outpost pricing.

    cost(n) = base_cost + cost_per_existing_outpost × n
    where n is the number of outposts already built across all provinces.
    """

    base_cost: int = Field(
        DEFAULT_OUTPOST_BASE_COST,
        ge=0,
        description="Price of the first outpost (R)",
    )
    cost_per_existing_outpost: int = Field(
        DEFAULT_OUTPOST_COST_PER_EXISTING,
        ge=0,
        description="Surcharge per outpost already built (R)",
    )

    model_config = ConfigDict(frozen=True)


class InfectionSeedConfig(BaseModel):
    """Initial infection policy.

    Every province draws its starting infection from uniform(min, max) using
    the engine's RNG.  Equal bounds give a fixed, RNG-independent seed.
    """

    min_infection: float = Field(DEFAULT_SEED_INFECTION_MIN, ge=0, le=1)
    max_infection: float = Field(DEFAULT_SEED_INFECTION_MAX, ge=0, le=1)

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @model_validator(mode="after")
    def _check_range(self) -> "InfectionSeedConfig":
        if self.min_infection > self.max_infection:
            raise ValueError("min_infection must not exceed max_infection")
        return self

    @property
    def is_fixed(self) -> bool:
        return self.min_infection == self.max_infection


class ClockConfig(BaseModel):
    """Driver-side clock settings (used by the mesa model, not the engine)."""

    minutes_per_step: float = Field(
        DEFAULT_MINUTES_PER_STEP,
        gt=0,
        description="In-game minutes elapsed per model step",
    )
    max_days: int = Field(
        DEFAULT_MAX_DAYS,
        gt=0,
        description="Stop the run after this many in-game days",
    )

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class RegionSpec(BaseModel):
    """One entry of the region catalog."""

    region_id: str = Field(..., min_length=1)
    display_name: str = ""
    tags: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def is_bonus(self) -> bool:
        return BONUS_TAG in self.tags


def _default_regions() -> list[RegionSpec]:
    return [
        RegionSpec(region_id=region_id, display_name=name)
        for region_id, name in DEFAULT_REGIONS
    ]


class ScenarioConfig(BaseModel):
    """Root configuration for a simulation scenario."""

    name: str = "Scenario"
    description: str = ""
    regions: list[RegionSpec] = Field(default_factory=_default_regions)
    starting_currency: int = Field(
        DEFAULT_STARTING_CURRENCY,
        ge=0,
        description="Shared spendable balance at the start of a run (R)",
    )

    # Sub-configs
    virus: VirusRateConfig = Field(default_factory=VirusRateConfig)
    outpost: OutpostRateConfig = Field(default_factory=OutpostRateConfig)
    cost: OutpostCostConfig = Field(default_factory=OutpostCostConfig)
    seeding: InfectionSeedConfig = Field(default_factory=InfectionSeedConfig)
    clock: ClockConfig = Field(default_factory=ClockConfig)

    seed: int | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def region_ids(self) -> list[str]:
        return [region.region_id for region in self.regions]

    def bonus_region_ids(self) -> frozenset[str]:
        """Union of configured bonus ids and regions tagged as bonus."""
        tagged = {region.region_id for region in self.regions if region.is_bonus}
        return frozenset(self.outpost.bonus_region_ids) | tagged
