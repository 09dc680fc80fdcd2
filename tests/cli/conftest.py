"""Fixtures for CLI tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def no_global_config(tmp_path: Path) -> Generator[None, None, None]:
    with patch("lootledger.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
        yield


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Data dir whose config sends logs to a file instead of the runner's stderr."""
    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "config.yaml").write_text(
        f"logging:\n  outputs:\n    - destination: {tmp_path / 'cli.log'}\n"
    )
    return directory
