"""Scenario Management Module.

The scenario directory holds two kinds of JSON files:

    <name>.json   one full ScenarioConfig
    config.json   a batch: scenario name -> partial ScenarioConfig

Either kind may carry a ``policy`` key naming the automated player
("greedy" or "none").  It is a driver setting rather than part of the
scenario, so it is split off before ScenarioConfig validation.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

from ..schemas import ScenarioConfig
from .policies import DEFAULT_POLICY, POLICIES, BuildPolicy, make_policy

logger = logging.getLogger(__name__)

SCENARIO_DIR = Path.cwd() / "scenarios"
BATCH_FILE = "config.json"


@dataclass(frozen=True)
class ScenarioEntry:
    """A validated scenario plus the policy that should play it."""

    config: ScenarioConfig
    policy: str = DEFAULT_POLICY

    def make_policy(self) -> BuildPolicy:
        return make_policy(self.policy)


def parse_scenario(data: dict[str, Any], name: str | None = None) -> ScenarioEntry:
    """Validate one scenario mapping.

    Args:
        data: Raw JSON object, optionally with a ``policy`` key.
        name: Default scenario name (batch key); ``data["name"]`` wins.

    Raises:
        ValueError: If the policy is unknown.
        ValidationError: If the rest does not match ScenarioConfig.
    """
    data = dict(data)
    policy = data.pop("policy", DEFAULT_POLICY)
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy '{policy}', expected one of {sorted(POLICIES)}")
    if name is not None:
        data = {"name": name, **data}
    return ScenarioEntry(config=ScenarioConfig.model_validate(data), policy=policy)


def _read_json(filename: str) -> Any:
    file_path = SCENARIO_DIR / filename
    if not file_path.exists():
        raise FileNotFoundError(f"Scenario file not found: {file_path}")
    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def list_scenarios() -> List[str]:
    """List single-scenario files, excluding the batch file.

    Returns:
        Sorted filenames (e.g., ['baseline.json', 'fast_virus.json']).
    """
    if not SCENARIO_DIR.exists():
        return []
    return sorted(f.name for f in SCENARIO_DIR.glob("*.json") if f.name != BATCH_FILE)


def load_scenario(filename: str) -> ScenarioEntry:
    """Load one scenario file.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValidationError: If JSON doesn't match schema.
    """
    entry = parse_scenario(_read_json(filename))
    logger.info(f"Loaded scenario '{entry.config.name}' from {filename}")
    return entry


def load_scenario_batch(filename: str = BATCH_FILE) -> List[ScenarioEntry]:
    """Load every scenario of a batch file, in file order.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValidationError: If any scenario doesn't match schema.
    """
    raw = _read_json(filename)
    entries = [parse_scenario(data, name=name) for name, data in raw.items()]
    logger.info(f"Loaded {len(entries)} scenarios from {filename}")
    return entries


def save_scenario(
    config: ScenarioConfig, filename: str, policy: str = DEFAULT_POLICY
) -> Path:
    """Write *config* (and its policy) as a single-scenario file.

    Raises:
        ValueError: If the policy is unknown.
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy '{policy}', expected one of {sorted(POLICIES)}")
    SCENARIO_DIR.mkdir(parents=True, exist_ok=True)
    file_path = SCENARIO_DIR / filename

    payload = config.model_dump(mode="json")
    payload["policy"] = policy
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    logger.info(f"Saved scenario '{config.name}' to {file_path}")
    return file_path
