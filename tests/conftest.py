"""Pytest configuration and shared fixtures."""

import logging
import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taskline.config import Config, ConfigModel  # noqa: E402
from taskline.storage import Storage  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the user's real configuration."""
    monkeypatch.setenv("TASKLINE_CONFIG", str(tmp_path / "config.yaml"))
    Config._instance = None
    yield
    Config._instance = None

    # Drop handlers installed by CLI runs; their streams are gone
    logger = logging.getLogger("taskline")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def config(tmp_path) -> ConfigModel:
    """Configuration rooted in a temporary directory."""
    return ConfigModel(
        data_dir=str(tmp_path / "data"),
        backup_dir=str(tmp_path / "backups"),
    )


@pytest.fixture
def storage(config) -> Storage:
    return Storage(config)


@pytest.fixture
def data_file(config) -> Path:
    """Path of the tasks file used by the ``storage`` fixture."""
    return config.get_data_path()
