"""Snapshot, Outcome and Run Record Schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .config import ScenarioConfig


class OutcomeKind(str, Enum):
    """Terminal state of a run."""

    NONE = "none"
    VICTORY = "victory"
    DEFEAT = "defeat"


class ProvinceSnapshot(BaseModel):
    """Standardized snapshot of a single province's state."""

    region_id: str = Field(..., description="Stable region identifier")
    infection: float = Field(..., ge=0, le=1, description="Infection level (0-1)")
    outpost_count: int = Field(..., ge=0, description="Cure outposts built here")
    disabled: bool = Field(..., description="Outposts disabled by high infection")
    fully_infected: bool = Field(..., description="Past the fully-infected threshold")

    model_config = ConfigDict(frozen=True)


class GlobalSnapshot(BaseModel):
    """Snapshot of the run-wide aggregate state."""

    cure_progress: float = Field(..., ge=0, le=1, description="Global cure meter")
    active_outpost_count: int = Field(..., ge=0)
    total_outpost_count: int = Field(..., ge=0)
    currency_balance: int = Field(..., ge=0, description="Shared balance (R)")

    model_config = ConfigDict(frozen=True)


class OutcomeRecord(BaseModel):
    """Statistics latched at the moment a run reached a terminal state."""

    kind: OutcomeKind = OutcomeKind.NONE
    cure_progress: float = 0.0
    day_index: int = 0
    active_outpost_count: int = 0
    total_outpost_count: int = 0
    currency_balance: int = 0
    provinces_saved: int = Field(0, description="Provinces not fully infected")
    provinces_fully_infected: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not OutcomeKind.NONE


class StepRecord(BaseModel):
    """Snapshot of a single simulation tick."""

    step: int
    day_index: int
    elapsed_hours: float = Field(..., description="In-game hours since run start")
    global_state: GlobalSnapshot
    provinces: list[ProvinceSnapshot] = Field(..., description="All province states")
    builds: list[str] = Field(
        default_factory=list, description="Regions that received an outpost"
    )

    model_config = ConfigDict(frozen=True)


class RunMetrics(BaseModel):
    """Aggregate metrics for a full simulation run."""

    outcome: OutcomeKind = Field(..., description="Terminal outcome (or none)")
    final_cure_progress: float = Field(..., description="Cure meter at run end")
    final_day: int = Field(..., description="Day index of the last tick")
    peak_mean_infection: float = Field(
        ..., description="Highest mean infection across provinces seen in the run"
    )
    total_outposts_built: int
    currency_spent: int
    win_day_in_target: bool = Field(
        ..., description="Victory landed inside the configured target window"
    )

    model_config = ConfigDict(frozen=True)


class SimulationRun(BaseModel):
    """Encapsulation of a full simulation run."""

    id: str = Field(..., description="Unique run identifier (timestamp)")
    sim_id: str | None = Field(None, description="Config Hash ID (short SHA-256)")
    config: ScenarioConfig
    steps: list[StepRecord] = Field(default_factory=list)
    outcome: OutcomeRecord = Field(default_factory=OutcomeRecord)
    metrics: RunMetrics = Field(..., description="Aggregate metrics")

    model_config = ConfigDict(frozen=True)
