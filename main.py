"""Entry point for the Outbreak Cure Simulator.

Usage:
    python main.py                 run scenarios/config.json (or every
                                   scenario file when there is no batch)
    python main.py baseline.json   run the named scenario files
"""

import logging
import sys

from outbreak_sim.services import SimulationRunner
from outbreak_sim.services import config_manager
from outbreak_sim.services.config_manager import ScenarioEntry


def run_scenario(runner: SimulationRunner, entry: ScenarioEntry) -> None:
    """Run a single scenario.

    Args:
        runner: Shared runner (keeps the session history).
        entry: Validated scenario and the policy that plays it.
    """
    config = entry.config
    print(f"--- Running {config.name} ({entry.policy}): {config.description} ---")
    run = runner.run_to_completion(config, entry.make_policy())

    metrics = run.metrics
    outcome = run.outcome
    print(f"Results for {config.name}:")
    print(f"  Outcome:            {metrics.outcome.value.upper()}")
    print(f"  Final day:          {metrics.final_day}")
    print(f"  Cure progress:      {metrics.final_cure_progress:.2%}")
    print(f"  Provinces saved:    {outcome.provinces_saved}")
    print(f"  Outposts built:     {metrics.total_outposts_built}")
    print(f"  Currency spent:     {metrics.currency_spent}")
    print(f"  Win in target days: {metrics.win_day_in_target}")
    print("\n")


def load_entries(filenames: list[str]) -> list[ScenarioEntry]:
    """Resolve command-line scenario names into validated entries."""
    if filenames:
        return [config_manager.load_scenario(name) for name in filenames]
    if (config_manager.SCENARIO_DIR / config_manager.BATCH_FILE).exists():
        return config_manager.load_scenario_batch()
    return [config_manager.load_scenario(name) for name in config_manager.list_scenarios()]


def main() -> None:
    """Load scenarios and run them."""
    logging.basicConfig(level=logging.WARNING)
    entries = load_entries(sys.argv[1:])
    if not entries:
        print("No scenario config found.")
        return

    runner = SimulationRunner()
    for entry in entries:
        run_scenario(runner, entry)


if __name__ == "__main__":
    main()
