# src/sp_trace/io/config.py
import os
from pathlib import Path

from sp_trace.config.models import ScenarioModel


def load_scenario(path: str | Path) -> ScenarioModel:
    p = Path(os.path.expandvars(os.path.expanduser(str(path))))
    return ScenarioModel.model_validate_json(p.read_text(encoding="utf-8"))
