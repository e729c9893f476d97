# ABOUTME: Shared fixtures: an isolated home directory and a registry bound to it
from pathlib import Path

import pytest

from mcpmgr.config import SettingsStore
from mcpmgr.registry import ServerRegistry


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary home directory, also exported as HOME."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    return home_dir


@pytest.fixture
def settings_store(home: Path) -> SettingsStore:
    return SettingsStore(home / ".mcp-manager" / "settings.json")


@pytest.fixture
def registry(home: Path, settings_store: SettingsStore) -> ServerRegistry:
    return ServerRegistry(settings_store, home=home)
