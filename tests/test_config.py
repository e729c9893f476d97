# Tests for settings loading and saving
import json
from pathlib import Path

from mcpmgr.config import SettingsStore, get_config_dir, get_settings_path
from mcpmgr.models import Settings


def test_get_settings_path(home: Path):
    """Test settings path is ~/.mcp-manager/settings.json."""
    path = get_settings_path()
    assert path == home / ".mcp-manager" / "settings.json"
    assert get_config_dir() == home / ".mcp-manager"


def test_store_defaults_to_settings_path(home: Path):
    assert SettingsStore().path == home / ".mcp-manager" / "settings.json"


class TestLoad:
    """Tests for SettingsStore.load."""

    def test_missing_file(self, tmp_path: Path):
        store = SettingsStore(tmp_path / "settings.json")
        assert store.load() == Settings()

    def test_load_custom_paths(self, tmp_path: Path):
        settings_file = tmp_path / "settings.json"
        settings_file.write_text(json.dumps({"customPaths": {"claude": "~/c.json"}}))

        assert SettingsStore(settings_file).load().custom_paths == {"claude": "~/c.json"}

    def test_load_legacy_key(self, tmp_path: Path):
        settings_file = tmp_path / "settings.json"
        settings_file.write_text(json.dumps({"custom_paths": {"codex": "/opt/codex.toml"}}))

        assert SettingsStore(settings_file).load().custom_paths == {"codex": "/opt/codex.toml"}

    def test_invalid_json_gives_defaults(self, tmp_path: Path, caplog):
        settings_file = tmp_path / "settings.json"
        settings_file.write_text("{ nope")

        assert SettingsStore(settings_file).load() == Settings()
        assert "Ignoring unreadable settings file" in caplog.text

    def test_wrong_shape_gives_defaults(self, tmp_path: Path):
        settings_file = tmp_path / "settings.json"
        settings_file.write_text(json.dumps({"customPaths": ["claude"]}))

        assert SettingsStore(settings_file).load() == Settings()

    def test_non_string_values_dropped(self, tmp_path: Path):
        settings_file = tmp_path / "settings.json"
        settings_file.write_text(json.dumps({"customPaths": {"claude": 1, "gemini": "/g.json"}}))

        assert SettingsStore(settings_file).load().custom_paths == {"gemini": "/g.json"}


class TestSave:
    """Tests for SettingsStore.save and set_custom_path."""

    def test_save_creates_parent_dir(self, tmp_path: Path):
        settings_file = tmp_path / "new" / "settings.json"
        store = SettingsStore(settings_file)

        store.save(Settings(custom_paths={"claude": "/c.json"}))

        assert json.loads(settings_file.read_text()) == {"customPaths": {"claude": "/c.json"}}

    def test_set_custom_path_persists_immediately(self, tmp_path: Path):
        settings_file = tmp_path / "settings.json"
        store = SettingsStore(settings_file)

        returned = store.set_custom_path("cursor", "~/cursor/mcp.json")

        assert returned.custom_paths == {"cursor": "~/cursor/mcp.json"}
        assert SettingsStore(settings_file).load().custom_paths == {"cursor": "~/cursor/mcp.json"}

    def test_empty_path_removes_override(self, tmp_path: Path):
        store = SettingsStore(tmp_path / "settings.json")
        store.set_custom_path("cursor", "~/cursor/mcp.json")
        store.set_custom_path("claude", "/c.json")

        store.set_custom_path("cursor", "")

        assert store.load().custom_paths == {"claude": "/c.json"}

    def test_removing_missing_override_is_noop(self, tmp_path: Path):
        store = SettingsStore(tmp_path / "settings.json")

        assert store.set_custom_path("cursor", "").custom_paths == {}
