# Platform catalog
import os
import sys
from pathlib import Path

from mcpmgr.errors import UnknownPlatformError
from mcpmgr.models import Platform


def app_support_dir(home: Path) -> Path:
    """Get the per-user application data directory for the current OS.

    ABOUTME: Editors (VS Code, Cursor) keep their User/ folder here
    """
    if sys.platform == "darwin":
        return home / "Library/Application Support"
    elif sys.platform == "win32":
        return Path(os.environ.get("APPDATA", home / "AppData/Roaming"))
    else:  # Linux and others
        return home / ".config"


# Registry of all supported platforms, in display order
ALL_PLATFORMS: tuple[Platform, ...] = (
    Platform(
        name="claude",
        display_name="Claude Code",
        config_key="mcpServers",
        format="json",
        path_fn=lambda home: home / ".claude.json",
    ),
    Platform(
        name="gemini",
        display_name="Gemini CLI",
        config_key="mcpServers",
        format="json",
        path_fn=lambda home: home / ".gemini" / "settings.json",
    ),
    Platform(
        name="codex",
        display_name="Codex CLI",
        config_key="mcp_servers",
        format="toml",
        path_fn=lambda home: home / ".codex" / "config.toml",
    ),
    Platform(
        name="copilot",
        display_name="Copilot CLI",
        config_key="mcpServers",
        format="json",
        path_fn=lambda home: home / ".copilot" / "mcp-config.json",
    ),
    Platform(
        name="vscode",
        display_name="VS Code",
        config_key="servers",
        format="json",
        path_fn=lambda home: app_support_dir(home) / "Code" / "User" / "mcp.json",
    ),
    Platform(
        name="cursor",
        display_name="Cursor",
        config_key="mcpServers",
        format="json",
        path_fn=lambda home: app_support_dir(home) / "Cursor" / "User" / "mcp.json",
    ),
    Platform(
        name="vscode-insiders",
        display_name="VS Code Insiders",
        config_key="servers",
        format="json",
        path_fn=lambda home: app_support_dir(home) / "Code - Insiders" / "User" / "mcp.json",
    ),
    Platform(
        name="windsurf",
        display_name="Windsurf",
        config_key="mcpServers",
        format="json",
        path_fn=lambda home: home / ".codeium" / "windsurf" / "mcp_config.json",
    ),
)

__all__ = [
    "ALL_PLATFORMS",
    "app_support_dir",
    "get_platform",
    "platform_names",
]


def get_platform(name: str) -> Platform:
    """Look up a platform by name.

    Raises:
        UnknownPlatformError: If name is not in the catalog
    """
    for platform in ALL_PLATFORMS:
        if platform.name == name:
            return platform
    raise UnknownPlatformError(name)


def platform_names() -> list[str]:
    """Return catalog names in display order."""
    return [platform.name for platform in ALL_PLATFORMS]
