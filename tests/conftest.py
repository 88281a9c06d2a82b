import pytest

from tododesk.config import AppPaths
from tododesk.data_manager import DataManager


@pytest.fixture
def paths(tmp_path):
    """App paths rooted in a temporary directory."""
    return AppPaths(config_dir=tmp_path / "config", data_dir=tmp_path / "data")


@pytest.fixture
def manager(paths):
    return DataManager(paths)
