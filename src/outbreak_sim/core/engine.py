"""Outbreak engine: the authoritative owner of all simulation state.

The engine owns every ProvinceState and the GlobalState for a run and is
the only place where builds are adjudicated and win/loss is decided.
Presentation code talks to it through a narrow API:

    commands:  initialize, advance / advance_minutes, try_build_outpost
    queries:   can_build_outpost, get_province_state, get_global_state
    events:    ProvinceChanged, GlobalChanged, OutcomeReached (via EventBus)

Run state machine: RUNNING -> VICTORY | RUNNING -> DEFEAT.  Exactly one
terminal transition fires per run; afterwards ticks still advance the
numbers but terminal conditions are no longer evaluated.
"""

import logging
import math
import random
import threading
from typing import Iterable

from pydantic import ValidationError

from outbreak_sim.core.events import EventBus, GlobalChanged, OutcomeReached, ProvinceChanged
from outbreak_sim.core.game_loop import build_outcome_record, execute_step, tick_is_finite
from outbreak_sim.core.outbreak_math import build_cost
from outbreak_sim.core.outcome import OutcomeRecorder
from outbreak_sim.core.results import (
    AdvanceResult,
    BuildResult,
    InitResult,
    OutbreakError,
    UnknownRegionError,
)
from outbreak_sim.core.state import GlobalState, ProvinceState, RegionId
from outbreak_sim.schemas import (
    GlobalSnapshot,
    OutcomeKind,
    OutcomeRecord,
    ProvinceSnapshot,
    RegionSpec,
    ScenarioConfig,
)
from outbreak_sim.schemas.defaults import MINUTES_PER_HOUR

logger = logging.getLogger(__name__)


class OutbreakEngine:
    """Stateful outbreak-vs-cure simulation for one run at a time.

    Attributes:
        config: Immutable scenario configuration (rates, costs, regions).
        bus: Event bus that receives every change notification.
        recorder: Owner-visible holder of the latest terminal outcome.
    """

    def __init__(
        self,
        config: ScenarioConfig | None = None,
        bus: EventBus | None = None,
        recorder: OutcomeRecorder | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or ScenarioConfig()
        self.bus = bus or EventBus()
        self.recorder = recorder or OutcomeRecorder()
        self._rng = rng or random.Random(self.config.seed)
        self._lock = threading.RLock()

        self._provinces: dict[RegionId, ProvinceState] = {}
        self._global = GlobalState()
        self._next_sequence: int = 0
        self._outcome_kind = OutcomeKind.NONE
        self._initialized = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def outcome_kind(self) -> OutcomeKind:
        return self._outcome_kind

    @property
    def is_terminal(self) -> bool:
        return self._outcome_kind is not OutcomeKind.NONE

    def initialize(
        self,
        regions: Iterable[str | RegionSpec] | None = None,
        starting_currency: int | None = None,
    ) -> InitResult:
        """Start a fresh run.

        Args:
            regions: Region ids or RegionSpec entries. Defaults to the
                configured catalog.
            starting_currency: Opening balance. Defaults to the configured one.

        Returns:
            InitResult; on failure the previous state is left untouched.
        """
        with self._lock:
            try:
                specs = self._resolve_regions(regions)
            except ValidationError as exc:
                logger.warning(f"Initialization rejected: {exc}")
                return InitResult(
                    ok=False,
                    error=OutbreakError.INVALID_CONFIGURATION,
                    message=str(exc),
                )
            balance = (
                self.config.starting_currency
                if starting_currency is None
                else starting_currency
            )

            problem = self._validate_setup(specs, balance)
            if problem:
                logger.warning(f"Initialization rejected: {problem}")
                return InitResult(
                    ok=False, error=OutbreakError.INVALID_CONFIGURATION, message=problem
                )

            bonus_ids = self.config.bonus_region_ids()
            seeding = self.config.seeding
            threshold = self.config.virus.fully_infected_threshold
            provinces: dict[RegionId, ProvinceState] = {}
            for spec in specs:
                if seeding.is_fixed:
                    infection = seeding.min_infection
                else:
                    infection = self._rng.uniform(
                        seeding.min_infection, seeding.max_infection
                    )
                region_id = RegionId(spec.region_id)
                provinces[region_id] = ProvinceState(
                    region_id,
                    infection=infection,
                    is_bonus=spec.is_bonus or spec.region_id in bonus_ids,
                    fully_infected_threshold=threshold,
                )

            self._provinces = provinces
            self._global = GlobalState(currency_balance=balance)
            self._next_sequence = 0
            self._outcome_kind = OutcomeKind.NONE
            self._initialized = True
            self.recorder.begin_run()

            logger.info(
                f"Initialized run '{self.config.name}' with {len(provinces)} regions, "
                f"balance={balance}"
            )
            return InitResult(ok=True)

    def _resolve_regions(
        self, regions: Iterable[str | RegionSpec] | None
    ) -> list[RegionSpec]:
        if regions is None:
            return list(self.config.regions)
        return [
            r if isinstance(r, RegionSpec) else RegionSpec(region_id=r)
            for r in regions
        ]

    def _validate_setup(self, specs: list[RegionSpec], balance: int) -> str:
        """Return a description of the first setup problem, or ''.

        Rates and thresholds are already bounded by the pydantic config models.
        """
        if not specs:
            return "Region set is empty"
        ids = [spec.region_id for spec in specs]
        if len(set(ids)) != len(ids):
            return "Region ids must be unique"
        if balance < 0:
            return "Starting currency must not be negative"
        return ""

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def advance_minutes(self, elapsed_minutes: float, day_index: int) -> AdvanceResult:
        """Advance by in-game minutes, as reported by the external clock."""
        return self.advance(elapsed_minutes / MINUTES_PER_HOUR, day_index)

    def advance(self, delta_hours: float, day_index: int) -> AdvanceResult:
        """Advance every province and the global meter by *delta_hours*.

        Rejected deltas (negative, non-finite, overflowing the configured
        rates, or a day index below 1) leave all state unchanged.  The outcome
        is latched before any notification goes out.
        """
        with self._lock:
            if not self._initialized:
                logger.warning("Attempted to advance before initialize")
                return AdvanceResult(ok=False, error=OutbreakError.NOT_INITIALIZED)
            if not math.isfinite(delta_hours) or delta_hours < 0 or day_index < 1:
                logger.warning(
                    f"Rejected tick: delta_hours={delta_hours}, day_index={day_index}"
                )
                return AdvanceResult(
                    ok=False,
                    error=OutbreakError.INVALID_TIME_DELTA,
                    message="delta_hours must be >= 0 and day_index >= 1",
                )

            provinces = list(self._provinces.values())
            if not tick_is_finite(provinces, self.config, delta_hours, day_index):
                logger.warning(
                    f"Rejected tick: delta_hours={delta_hours} overflows the "
                    f"configured rates on day {day_index}"
                )
                return AdvanceResult(
                    ok=False,
                    error=OutbreakError.INVALID_TIME_DELTA,
                    message="delta_hours is too large for the configured rates",
                )

            step = execute_step(
                provinces, self._global, self.config, delta_hours, day_index
            )
            logger.debug(
                f"Day {day_index} tick {delta_hours:.3f}h: "
                f"cure={self._global.cure_progress:.4f}, "
                f"factor={step.effective_factor:.3f}, "
                f"changed={len(step.changed_regions)}"
            )

            record = None
            if not self.is_terminal and step.terminal is not OutcomeKind.NONE:
                record = self._latch(step.terminal, day_index)

            for region_id in step.changed_regions:
                self.bus.emit(ProvinceChanged(self._provinces[region_id].snapshot()))
            if step.global_changed:
                self.bus.emit(GlobalChanged(self._global.snapshot()))
            if record is not None:
                self.bus.emit(OutcomeReached(record))

            return AdvanceResult(
                ok=True,
                changed_regions=tuple(step.changed_regions),
                global_changed=step.global_changed,
                outcome=record,
            )

    def _latch(self, kind: OutcomeKind, day_index: int) -> OutcomeRecord:
        self._outcome_kind = kind
        record = build_outcome_record(
            kind, list(self._provinces.values()), self._global, day_index
        )
        self.recorder.record(record)
        logger.info(
            f"Outcome reached: {kind.value.upper()} on day {day_index} "
            f"(cure={record.cure_progress:.2%}, saved={record.provinces_saved}, "
            f"lost={record.provinces_fully_infected})"
        )
        return record

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def next_outpost_cost(self) -> int:
        return build_cost(self._global.total_outpost_count, self.config.cost)

    def can_build_outpost(self, region_id: str) -> BuildResult:
        """Preview a build: same checks as try_build_outpost, no mutation."""
        with self._lock:
            if not self._initialized:
                return BuildResult(success=False, error=OutbreakError.NOT_INITIALIZED)
            province = self._provinces.get(RegionId(region_id))
            if province is None:
                return BuildResult(
                    success=False,
                    error=OutbreakError.INVALID_REGION,
                    message=f"Unknown region: {region_id}",
                )

            cost = self.next_outpost_cost()
            if province.infection >= self.config.virus.fully_infected_threshold:
                return BuildResult(
                    success=False,
                    cost=cost,
                    error=OutbreakError.PROVINCE_FULLY_INFECTED,
                    message=f"{region_id} is fully infected",
                )
            if cost > self._global.currency_balance:
                return BuildResult(
                    success=False,
                    cost=cost,
                    error=OutbreakError.NOT_ENOUGH_CURRENCY,
                    message=f"Need {cost}, have {self._global.currency_balance}",
                )
            return BuildResult(success=True, cost=cost)

    def try_build_outpost(self, region_id: str) -> BuildResult:
        """Build one outpost in *region_id* if legal. All-or-nothing."""
        with self._lock:
            check = self.can_build_outpost(region_id)
            if not check.success:
                logger.debug(f"Build in {region_id} rejected: {check.error}")
                return check

            province = self._provinces[RegionId(region_id)]
            self._global.currency_balance -= check.cost
            province.add_outpost(self._next_sequence)
            self._next_sequence += 1
            self._global.recompute_counts(list(self._provinces.values()))

            logger.info(
                f"Built outpost #{province.outpost_count} in {region_id} "
                f"for {check.cost} (balance={self._global.currency_balance})"
            )
            self.bus.emit(ProvinceChanged(province.snapshot()))
            self.bus.emit(GlobalChanged(self._global.snapshot()))
            return check

    @property
    def build_sequence(self) -> list[tuple[int, str]]:
        """Global build order as (sequence, region_id) pairs."""
        pairs = [
            (sequence, province.region_id)
            for province in self._provinces.values()
            for sequence in province.build_sequence
        ]
        return sorted(pairs)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_province_state(self, region_id: str) -> ProvinceSnapshot:
        """Snapshot of one province.

        Raises:
            UnknownRegionError: If the region is not in this run's catalog.
        """
        province = self._provinces.get(RegionId(region_id))
        if province is None:
            raise UnknownRegionError(region_id)
        return province.snapshot()

    def get_all_provinces(self) -> list[ProvinceSnapshot]:
        return [self._provinces[key].snapshot() for key in sorted(self._provinces)]

    def get_global_state(self) -> GlobalSnapshot:
        return self._global.snapshot()

    @property
    def region_ids(self) -> list[str]:
        return list(self._provinces)
