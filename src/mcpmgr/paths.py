# ABOUTME: Resolves which file, container key and format a platform uses
# ABOUTME: User path overrides change the location only, never the shape
from pathlib import Path
from typing import NamedTuple

from mcpmgr.models import ConfigFormat, Settings
from mcpmgr.platforms import get_platform


class ResolvedPath(NamedTuple):
    path: Path
    config_key: str
    format: ConfigFormat


def expand_custom_path(value: str, home: Path) -> Path:
    """Expand a leading ~ in an override against home.

    Examples:
        >>> expand_custom_path("~/custom/mcp.json", Path("/home/u"))
        PosixPath('/home/u/custom/mcp.json')
        >>> expand_custom_path("/etc/mcp.json", Path("/home/u"))
        PosixPath('/etc/mcp.json')
    """
    if value.startswith("~"):
        return home / value[1:].lstrip("/\\")
    return Path(value)


def get_custom_path(name: str, settings: Settings) -> str | None:
    """Return the non-empty override for a platform, if any."""
    custom = settings.custom_paths.get(name)
    return custom if custom else None


def resolve_platform_path(
    name: str,
    settings: Settings,
    home: Path | None = None,
) -> ResolvedPath:
    """Resolve a platform's config file, container key and format.

    ABOUTME: Override from settings wins over the catalog's default path
    ABOUTME: home defaults to the current user's home directory

    Args:
        name: Platform name from the catalog
        settings: Loaded settings holding path overrides
        home: Home directory to expand against

    Returns:
        ResolvedPath for the platform

    Raises:
        UnknownPlatformError: If name is not in the catalog
    """
    platform = get_platform(name)
    home = home if home is not None else Path.home()

    custom = get_custom_path(name, settings)
    if custom is not None:
        path = expand_custom_path(custom, home)
    else:
        path = platform.default_path(home)

    return ResolvedPath(path=path, config_key=platform.config_key, format=platform.format)
