"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from devsweep.settings import Settings


def _make_file(path: Path, size: int = 0) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    return path


def _snapshot(root: Path) -> dict[str, int]:
    return {
        str(p.relative_to(root)): (-1 if p.is_dir() else p.stat().st_size)
        for p in sorted(root.rglob("*"))
    }


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Point the settings store at an empty temp config directory."""
    config_home = tmp_path / "xdg_config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr(Settings, "_instance", None)
    return config_home / "devsweep" / "settings.json"


@pytest.fixture
def make_file():
    """Create a sparse file of the given size, creating parents as needed."""
    return _make_file


@pytest.fixture
def snapshot():
    """Map every path under a root to its size (-1 for directories)."""
    return _snapshot


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Use a temp directory as the user's home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("USERPROFILE", raising=False)
    return home


@pytest.fixture
def root(tmp_path):
    """Empty scan root."""
    path = tmp_path / "root"
    path.mkdir()
    return path
