"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from metmar.config.schema import MetmarConfig, SourceConfig


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def coastal_raw(fixtures_dir: Path) -> bytes:
    return (fixtures_dir / "coastal_bulletin.json").read_bytes()


@pytest.fixture
def single_area_raw(fixtures_dir: Path) -> bytes:
    return (fixtures_dir / "single_area_bulletin.json").read_bytes()


@pytest.fixture
def zones_raw(fixtures_dir: Path) -> bytes:
    return (fixtures_dir / "zones.html").read_bytes()


@pytest.fixture
def default_config() -> MetmarConfig:
    """Coastal config for two areas on a test host."""
    return MetmarConfig(
        source=SourceConfig(
            url_template="https://test-meteo.example.com/cote/{area_id}",
            area_ids=["1", "2"],
        )
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "source": {"variant": "coastal", "timeout_seconds": 5},
        "server": {"port": 5001},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
