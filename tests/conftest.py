"""Shared pytest fixtures."""

import pytest

import rit.core.services.observability as observability
from rit.core.services.rit_paths import RitPaths


@pytest.fixture(autouse=True)
def reset_observability(monkeypatch):
    """Give each test a fresh run id and default logging settings."""
    monkeypatch.setattr(observability, "_current_run_id", None)
    for var in ("RIT_RUN_ID", "RIT_LOG_FORMAT", "RIT_DEBUG", "RIT_LOG_SILENT", "RIT_HOME"):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def rit_paths(tmp_path, monkeypatch) -> RitPaths:
    """An isolated user home with a ~/.rit directory and an empty local repo."""
    home = tmp_path / "home"
    rit_home = home / ".rit"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("RIT_HOME", str(rit_home))
    paths = RitPaths(user_home=home, rit_home=rit_home)
    paths.local_repo_dir.mkdir(parents=True)
    return paths


@pytest.fixture
def make_formula():
    """Create a formula directory (with a config file) under a root."""

    def _make(root, *segments, files=("config.json",)):
        path = root.joinpath(*segments)
        path.mkdir(parents=True, exist_ok=True)
        for name in files:
            (path / name).write_text("{}\n", encoding="utf-8")
        return path

    return _make
