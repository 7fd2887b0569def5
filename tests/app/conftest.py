import pytest

from dispatch_sim.app.build import build
from dispatch_sim.domain.entities.geography import Point
from dispatch_sim.domain.entities.motion import Velocity
from dispatch_sim.domain.entities.vehicle import Vehicle


def still_config(**over):
    """Scenario whose vehicles never move on their own: hand-placed fleets stay put."""
    cfg = {
        "name": "tests",
        "run_id": "t-1",
        "sim": {"epoch": [2025, 1, 1, 0, 0, 0], "seed": 1},
        "fleet": {"size": 0, "initial_speed": 0.0, "jitter": 0.0, "bounce_noise": 0.0},
    }
    cfg.update(over)
    return cfg


@pytest.fixture
def place():
    """place(engine, [(id, type_name, x, y), ...]) installs a hand-built fleet."""

    def _place(engine, rows):
        types = engine.trips.types
        engine.world.fleet.load(
            Vehicle(vid, types.get(name), Point(x, y), Velocity(0.0, 0.0))
            for vid, name, x, y in rows
        )
        return engine.world.fleet.vehicles

    return _place


@pytest.fixture
def engine():
    return build(still_config(), use_logging=False)
