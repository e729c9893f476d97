# Per-platform server read/write access
import logging
from pathlib import Path

from mcpmgr.config import SettingsStore
from mcpmgr.errors import UnknownPlatformError
from mcpmgr.models import MCPServer, PlatformInfo
from mcpmgr.paths import ResolvedPath, get_custom_path, resolve_platform_path
from mcpmgr.platforms import ALL_PLATFORMS
from mcpmgr.platforms.json_format import read_json_servers, write_json_servers
from mcpmgr.platforms.toml_format import read_toml_servers, write_toml_servers

logger = logging.getLogger(__name__)


class ServerRegistry:
    """Reads and writes each platform's server list through its codec.

    ABOUTME: Every higher-level operation goes through this class
    ABOUTME: Settings are loaded on each resolve so overrides apply immediately
    """

    def __init__(self, settings_store: SettingsStore | None = None, home: Path | None = None) -> None:
        self.settings_store = settings_store if settings_store else SettingsStore()
        self._home = home

    @property
    def home(self) -> Path:
        return self._home if self._home is not None else Path.home()

    def resolve(self, name: str) -> ResolvedPath:
        """Resolve a platform's path, key and format.

        Raises:
            UnknownPlatformError: If name is not in the catalog
        """
        return resolve_platform_path(name, self.settings_store.load(), self.home)

    def read_servers(self, name: str) -> list[MCPServer]:
        """Read a platform's servers.

        ABOUTME: Unknown platform, missing or invalid file all yield []
        """
        try:
            resolved = self.resolve(name)
        except UnknownPlatformError:
            logger.debug(f"Skipping read for unknown tool: {name}")
            return []

        if resolved.format == "toml":
            return read_toml_servers(resolved.path)
        return read_json_servers(resolved.path, resolved.config_key)

    def write_servers(self, name: str, servers: list[MCPServer]) -> None:
        """Replace a platform's servers, preserving the rest of its file.

        Raises:
            UnknownPlatformError: If name is not in the catalog
            OSError: If the config file cannot be read or written
        """
        resolved = self.resolve(name)

        if resolved.format == "toml":
            write_toml_servers(resolved.path, servers)
        else:
            write_json_servers(resolved.path, resolved.config_key, servers)

    def read_all(self) -> dict[str, list[MCPServer]]:
        """Read every catalog platform, keyed by platform name."""
        return {platform.name: self.read_servers(platform.name) for platform in ALL_PLATFORMS}

    def list_platforms(self) -> list[PlatformInfo]:
        """Describe every platform with its resolved config location.

        ABOUTME: is_custom_path is true only for a non-empty override
        """
        settings = self.settings_store.load()
        home = self.home

        result: list[PlatformInfo] = []
        for platform in ALL_PLATFORMS:
            resolved = resolve_platform_path(platform.name, settings, home)
            result.append(
                PlatformInfo(
                    name=platform.name,
                    display_name=platform.display_name,
                    config_path=str(resolved.path),
                    config_key=resolved.config_key,
                    exists=resolved.path.exists(),
                    is_custom_path=get_custom_path(platform.name, settings) is not None,
                )
            )
        return result
