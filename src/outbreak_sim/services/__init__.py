"""Services package for simulation orchestration.

This package contains:
- mesa_model.py: Mesa model integration (OutbreakModel, ProvinceAgent)
- data_collect.py: Mesa data collection functions
- policies.py: Automated build policies standing in for the player
- metrics.py: Pure metric functions over snapshots
- config_manager.py: Scenario file loading/saving
- simulation.py: SimulationRunner for headless runs and run history
"""

from outbreak_sim.services.mesa_model import OutbreakModel, ProvinceAgent
from outbreak_sim.services.policies import GreedyBuildPolicy, NoBuildPolicy
from outbreak_sim.services.simulation import SimulationRunner

__all__ = [
    "OutbreakModel",
    "ProvinceAgent",
    "GreedyBuildPolicy",
    "NoBuildPolicy",
    "SimulationRunner",
]
