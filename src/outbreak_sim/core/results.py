"""Value-level operation results.

Rejected builds, bad time deltas and bad setups are expected outcomes of
normal play, so the engine returns them as values instead of raising.
"""

from dataclasses import dataclass
from enum import Enum

from outbreak_sim.schemas import OutcomeRecord


class OutbreakError(str, Enum):
    """Reasons an engine operation was rejected."""

    INVALID_CONFIGURATION = "invalid_configuration"
    INVALID_REGION = "invalid_region"
    PROVINCE_FULLY_INFECTED = "province_fully_infected"
    NOT_ENOUGH_CURRENCY = "not_enough_currency"
    INVALID_TIME_DELTA = "invalid_time_delta"
    NOT_INITIALIZED = "not_initialized"


class UnknownRegionError(KeyError):
    """Raised by synchronous queries for a region id outside the catalog."""

    error = OutbreakError.INVALID_REGION

    def __init__(self, region_id: str) -> None:
        super().__init__(region_id)
        self.region_id = region_id

    def __str__(self) -> str:
        return f"Unknown region: {self.region_id!r}"


@dataclass(frozen=True)
class InitResult:
    """Result of ``OutbreakEngine.initialize``."""

    ok: bool
    error: OutbreakError | None = None
    message: str = ""


@dataclass(frozen=True)
class BuildResult:
    """Result of a build attempt or a build preview.

    ``cost`` is always the computed price when the region exists, so a
    rejected request can still be displayed with its price.
    """

    success: bool
    cost: int = 0
    error: OutbreakError | None = None
    message: str = ""


@dataclass(frozen=True)
class AdvanceResult:
    """Result of one ``OutbreakEngine.advance`` call."""

    ok: bool
    error: OutbreakError | None = None
    message: str = ""
    changed_regions: tuple[str, ...] = ()
    global_changed: bool = False
    outcome: OutcomeRecord | None = None  # set only on the latching step
