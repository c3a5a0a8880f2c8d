"""Province and global state for one run.

Province update per tick (see game_loop):
    infection' = clamp01(infection + infection_delta - local_cure)
    local_cure = local_cure_per_hour × outposts × hours   (active outposts only)

Disable gate (hysteresis):
    outposts > 0 and infection >= threshold  -> disabled
    disabled and infection < threshold       -> enabled
"""

import logging
from dataclasses import dataclass
from typing import NewType

from outbreak_sim.schemas import GlobalSnapshot, ProvinceSnapshot

from .outbreak_math import clamp01

logger = logging.getLogger(__name__)

RegionId = NewType("RegionId", str)


class ProvinceState:
    """Mutable state of one province.

    Attributes:
        region_id: Stable region identifier.
        infection: Infection level in [0, 1].
        is_bonus: Whether outposts here get the bonus global multiplier.
        disabled: Outposts are switched off by high local infection.
        fully_infected: Derived flag, refreshed every tick.
        build_sequence: Global build-order numbers of this province's outposts.
    """

    def __init__(
        self,
        region_id: RegionId,
        infection: float = 0.0,
        is_bonus: bool = False,
        fully_infected_threshold: float = 1.0,
    ) -> None:
        self.region_id: RegionId = region_id
        self.infection: float = clamp01(infection)
        self.is_bonus: bool = is_bonus
        self.disabled: bool = False
        self.fully_infected: bool = self.infection >= fully_infected_threshold
        self.build_sequence: list[int] = []

    @property
    def outpost_count(self) -> int:
        return len(self.build_sequence)

    @property
    def has_outpost(self) -> bool:
        return self.outpost_count > 0

    @property
    def is_active(self) -> bool:
        """Whether this province's outposts currently produce cure."""
        return self.has_outpost and not self.disabled

    def apply_infection(
        self, infection_delta: float, local_cure_per_hour: float, delta_hours: float
    ) -> None:
        """Advance infection by one tick, net of local cure from active outposts."""
        local_cure = 0.0
        if self.is_active:
            local_cure = local_cure_per_hour * self.outpost_count * delta_hours
        self.infection = clamp01(self.infection + infection_delta - local_cure)

    def update_disabled(self, disable_threshold: float) -> None:
        """Apply the hysteresis gate. No-op for provinces without outposts."""
        if not self.has_outpost:
            return
        if not self.disabled and self.infection >= disable_threshold:
            self.disabled = True
            logger.warning(
                f"Province {self.region_id} outposts DISABLED at infection "
                f"{self.infection:.3f}"
            )
        elif self.disabled and self.infection < disable_threshold:
            self.disabled = False
            logger.info(
                f"Province {self.region_id} outposts re-enabled at infection "
                f"{self.infection:.3f}"
            )

    def update_fully_infected(self, fully_infected_threshold: float) -> None:
        self.fully_infected = self.infection >= fully_infected_threshold

    def add_outpost(self, sequence: int) -> None:
        """Record a new outpost; fresh capacity always starts active."""
        self.build_sequence.append(sequence)
        self.disabled = False

    def key(self) -> tuple[float, int, bool]:
        """Fields whose change triggers a province notification."""
        return (self.infection, self.outpost_count, self.disabled)

    def snapshot(self) -> ProvinceSnapshot:
        return ProvinceSnapshot(
            region_id=self.region_id,
            infection=self.infection,
            outpost_count=self.outpost_count,
            disabled=self.disabled,
            fully_infected=self.fully_infected,
        )


@dataclass
class GlobalState:
    """Run-wide aggregates. Outpost counts are recomputed from provinces."""

    cure_progress: float = 0.0
    active_outpost_count: int = 0
    total_outpost_count: int = 0
    currency_balance: int = 0

    def recompute_counts(self, provinces: list[ProvinceState]) -> None:
        self.total_outpost_count = sum(p.outpost_count for p in provinces)
        self.active_outpost_count = sum(
            p.outpost_count for p in provinces if not p.disabled
        )

    def key(self) -> tuple[float, int, int, int]:
        return (
            self.cure_progress,
            self.active_outpost_count,
            self.total_outpost_count,
            self.currency_balance,
        )

    def snapshot(self) -> GlobalSnapshot:
        return GlobalSnapshot(
            cure_progress=self.cure_progress,
            active_outpost_count=self.active_outpost_count,
            total_outpost_count=self.total_outpost_count,
            currency_balance=self.currency_balance,
        )
