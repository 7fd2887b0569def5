# src/dispatch_sim/io/config.py
from pathlib import Path

from dispatch_sim.config.models import ScenarioModel


def load_scenario(path: str | Path) -> ScenarioModel:
    """Read a JSON scenario file; pydantic raises ValidationError on bad input."""
    return ScenarioModel.model_validate_json(Path(path).read_text(encoding="utf-8"))
