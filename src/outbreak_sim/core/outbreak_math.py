"""Pure outbreak math shared by the game loop and the build path.

    cost(n)        = base + per_existing × max(n, 0)
    multiplier(i)  = factor ^ i          (1.0 for i <= 0)
    strength(day)  = 1 + growth × (day - 1)

All functions are side-effect free.
"""

from outbreak_sim.schemas import OutpostCostConfig


def clamp01(value: float) -> float:
    """Clamp a value to the unit interval."""
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


def build_cost(existing_total_outposts: int, cost_config: OutpostCostConfig) -> int:
    """Price of the next outpost given how many already exist run-wide.

    Args:
        existing_total_outposts: Outposts already built across all provinces.
            Negative values are treated as 0.
        cost_config: Base and incremental cost.

    Returns:
        The cost in currency units (never negative for non-negative config).
    """
    existing = max(existing_total_outposts, 0)
    return cost_config.base_cost + cost_config.cost_per_existing_outpost * existing


def global_multiplier(index: int, diminishing_factor: float) -> float:
    """Diminishing-return multiplier for the outpost at global rank ``index``.

    The first outpost (index 0) counts fully; each later one is worth
    ``diminishing_factor`` times the previous.
    """
    if index <= 0:
        return 1.0
    return diminishing_factor**index


def virus_strength(day_index: int, daily_growth: float) -> float:
    """Linear virus ramp: 1.0 on day 1, +daily_growth per elapsed day."""
    return 1.0 + daily_growth * (day_index - 1)
