"""Latest terminal outcome, latched once per run.

The recorder is an ordinary owned object: the host creates it (or lets the
engine create one) and keeps a reference for the end-state screen.  A new
run clears the latch but keeps the previous record readable until the new
run reaches its own terminal state.
"""

import logging

from outbreak_sim.schemas import OutcomeRecord

logger = logging.getLogger(__name__)


class OutcomeRecorder:
    """Write-once-per-run, read-many holder of the last OutcomeRecord."""

    def __init__(self) -> None:
        self._latest: OutcomeRecord | None = None
        self._latched: bool = False

    @property
    def latest(self) -> OutcomeRecord | None:
        return self._latest

    @property
    def has_outcome(self) -> bool:
        return self._latest is not None

    @property
    def latched(self) -> bool:
        """Whether the current run has already recorded its outcome."""
        return self._latched

    def begin_run(self) -> None:
        self._latched = False

    def record(self, outcome: OutcomeRecord) -> bool:
        """Store *outcome* unless this run already latched one.

        Returns:
            True if the record was stored, False if ignored.
        """
        if self._latched:
            logger.debug("Outcome already latched for this run; ignoring")
            return False
        self._latest = outcome
        self._latched = True
        return True
