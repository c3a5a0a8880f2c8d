"""Data collection logic for the simulation."""

import mesa


def _engine(model: mesa.Model):
    from outbreak_sim.services.mesa_model import OutbreakModel

    if isinstance(model, OutbreakModel):
        return model.engine
    return None


def compute_cure_progress(model: mesa.Model) -> float:
    """Get the global cure meter.

    Args:
        model: The Mesa model instance.

    Returns:
        float: Cure progress (0.0 to 1.0).
    """
    engine = _engine(model)
    if engine is None or not engine.initialized:
        return 0.0
    return engine.get_global_state().cure_progress


def compute_mean_infection(model: mesa.Model) -> float:
    """Calculate the average infection level across provinces.

    Args:
        model: The Mesa model instance.

    Returns:
        float: Mean infection (0.0 to 1.0).
    """
    from outbreak_sim.services.mesa_model import ProvinceAgent

    agents = [a for a in model.agents if isinstance(a, ProvinceAgent)]
    if not agents:
        return 0.0
    return sum(a.infection for a in agents) / len(agents)


def compute_fully_infected(model: mesa.Model) -> int:
    """Count provinces past the fully-infected threshold."""
    from outbreak_sim.services.mesa_model import ProvinceAgent

    return sum(
        1 for a in model.agents if isinstance(a, ProvinceAgent) and a.fully_infected
    )


def compute_active_outposts(model: mesa.Model) -> int:
    engine = _engine(model)
    if engine is None or not engine.initialized:
        return 0
    return engine.get_global_state().active_outpost_count


def compute_total_outposts(model: mesa.Model) -> int:
    engine = _engine(model)
    if engine is None or not engine.initialized:
        return 0
    return engine.get_global_state().total_outpost_count


def compute_currency(model: mesa.Model) -> int:
    engine = _engine(model)
    if engine is None or not engine.initialized:
        return 0
    return engine.get_global_state().currency_balance
