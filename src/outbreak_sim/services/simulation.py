"""Simulation runner - handles headless run execution.

This module drives an OutbreakModel tick by tick, records a StepRecord per
tick, and packs finished runs into SimulationRun records kept in a session
history.
"""

import hashlib
import json
import logging
import time
from pathlib import Path

from outbreak_sim.schemas import (
    OutcomeRecord,
    ScenarioConfig,
    SimulationRun,
    StepRecord,
)
from outbreak_sim.services.mesa_model import OutbreakModel
from outbreak_sim.services.metrics import calculate_run_metrics
from outbreak_sim.services.policies import BuildPolicy

logger = logging.getLogger(__name__)


class SimulationRunner:
    """Stateful runner for one active model plus a session history.

    Attributes:
        model: The active OutbreakModel, or None before start_run.
        steps: StepRecords of the active run.
        history: Packed runs of this session, oldest first.
    """

    def __init__(self) -> None:
        self.model: OutbreakModel | None = None
        self.steps: list[StepRecord] = []
        self.history: list[SimulationRun] = []

    def start_run(
        self, config: ScenarioConfig, policy: BuildPolicy | None = None
    ) -> OutbreakModel:
        """Start a fresh run, discarding any unpacked active run."""
        logger.info(f"Starting new run '{config.name}' with seed={config.seed}")
        self.model = OutbreakModel(config, policy=policy)
        self.steps = []
        return self.model

    def step(self) -> StepRecord | None:
        """Advance the active model one tick and record it."""
        model = self.model
        if model is None:
            logger.warning("Attempted to step without a model")
            return None
        if not model.running:
            return None

        day_index = model.day_index
        model.step()

        record = StepRecord(
            step=model.tick_count,
            day_index=day_index,
            elapsed_hours=model.elapsed_hours,
            global_state=model.engine.get_global_state(),
            provinces=model.get_province_snapshots(),
            builds=list(model.last_builds),
        )
        self.steps.append(record)
        return record

    def run_to_completion(
        self, config: ScenarioConfig, policy: BuildPolicy | None = None
    ) -> SimulationRun:
        """Run *config* until an outcome latches or the day limit is hit."""
        model = self.start_run(config, policy)
        while model.running:
            self.step()
        return self.pack_current_run()

    def pack_current_run(self) -> SimulationRun:
        """Finalize the active run and add it to history.

        Raises:
            RuntimeError: If no run was started.
        """
        model = self.model
        if model is None:
            raise RuntimeError("No active run to pack")

        timestamp = time.strftime("%Y%m%d_%H%M%S")
        outcome = model.recorder.latest if model.recorder.latched else OutcomeRecord()

        # sim_id: short SHA-256 hash of the config for display labels
        config_json = json.dumps(model.config.model_dump(mode="json"), sort_keys=True)
        short_hash = hashlib.sha256(config_json.encode("utf-8")).hexdigest()[:8]

        run = SimulationRun(
            id=f"run_{timestamp}_{len(self.history) + 1}",
            sim_id=short_hash,
            config=model.config,
            steps=list(self.steps),
            outcome=outcome,
            metrics=calculate_run_metrics(self.steps, outcome, model.config),
        )
        logger.info(
            f"Packed run {run.id}: {run.metrics.outcome.value} "
            f"after {len(run.steps)} ticks"
        )
        self.history.append(run)
        return run

    def save_run(self, run: SimulationRun, base_dir: Path | str = "runs") -> Path:
        """Write a run report to ``<base_dir>/<run id>/full_run.json``."""
        run_dir = Path(base_dir) / run.id
        run_dir.mkdir(parents=True, exist_ok=True)

        filepath = run_dir / "full_run.json"
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(run.model_dump_json(indent=2))

        logger.info(f"Saved run to {filepath}")
        return filepath
