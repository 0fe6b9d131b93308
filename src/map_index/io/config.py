# src/map_index/io/config.py
from pathlib import Path

from map_index.config.models import MapIndexModel


def load_config(path: str | Path) -> MapIndexModel:
    return MapIndexModel.model_validate_json(Path(path).expanduser().read_text())
