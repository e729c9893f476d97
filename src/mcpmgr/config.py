# Settings loading and saving for mcpmgr
import json
import logging
from pathlib import Path

from mcpmgr.models import Settings

logger = logging.getLogger(__name__)

# ABOUTME: Name of the per-user directory holding settings and backups
CONFIG_DIR_NAME = ".mcp-manager"

# ABOUTME: Settings file name inside the config directory (JSON format)
SETTINGS_FILE_NAME = "settings.json"


def get_config_dir() -> Path:
    """Return the mcpmgr config directory.

    ABOUTME: Returns ~/.mcp-manager, evaluated at call time
    ABOUTME: Directory may not exist yet
    """
    return Path.home() / CONFIG_DIR_NAME


def get_settings_path() -> Path:
    """Return the path to the settings file (~/.mcp-manager/settings.json)."""
    return get_config_dir() / SETTINGS_FILE_NAME


class SettingsStore:
    """Load-on-demand, save-on-write access to settings.json.

    ABOUTME: Every load() reads the file again; nothing is cached
    ABOUTME: set_custom_path() persists immediately
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize store with optional custom settings path.

        ABOUTME: Defaults to ~/.mcp-manager/settings.json if not provided
        """
        self._path = path

    @property
    def path(self) -> Path:
        return self._path if self._path else get_settings_path()

    def load(self) -> Settings:
        """Load settings from disk.

        ABOUTME: Missing file yields default settings
        ABOUTME: Unreadable or malformed file logs a warning and yields defaults

        Returns:
            Parsed Settings object
        """
        path = self.path
        if not path.exists():
            return Settings()

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable settings file {path}: {e}")
            return Settings()

        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {path}: expected a JSON object")
            return Settings()

        custom_paths = data.get("customPaths", data.get("custom_paths", {}))
        if not isinstance(custom_paths, dict):
            logger.warning(f"Ignoring malformed 'customPaths' in {path}")
            custom_paths = {}

        return Settings(
            custom_paths={
                str(name): value
                for name, value in custom_paths.items()
                if isinstance(value, str)
            }
        )

    def save(self, settings: Settings) -> None:
        """Save settings to disk.

        ABOUTME: Creates parent directory if needed

        Raises:
            OSError: If file cannot be written
        """
        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump({"customPaths": settings.custom_paths}, f, indent=2)
            f.write("\n")

    def set_custom_path(self, name: str, path: str) -> Settings:
        """Set or clear the path override for a platform.

        ABOUTME: Empty path removes the override
        ABOUTME: Saves immediately and returns the new settings

        Args:
            name: Platform name
            path: Override path (may start with ~), or "" to reset

        Returns:
            Settings after the change
        """
        settings = self.load()
        if path:
            settings.custom_paths[name] = path
            logger.info(f"Custom path for {name} set to {path}")
        else:
            settings.custom_paths.pop(name, None)
            logger.info(f"Custom path for {name} removed")

        self.save(settings)
        return settings
