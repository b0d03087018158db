"""YAML config loader."""

from pathlib import Path

import yaml

from metmar.config.defaults import DEFAULT_AREA_IDS
from metmar.config.schema import MetmarConfig


def load_config(path: str | Path) -> MetmarConfig:
    """Load and validate config from a YAML file.

    If no area ids are specified in the YAML, injects DEFAULT_AREA_IDS.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    source = raw.get("source") or {}
    if not source.get("area_ids"):
        source["area_ids"] = list(DEFAULT_AREA_IDS)
    raw["source"] = source

    return MetmarConfig(**raw)
