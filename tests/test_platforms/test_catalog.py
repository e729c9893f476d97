# Tests for the platform catalog
import sys
from pathlib import Path

import pytest

from mcpmgr.errors import UnknownPlatformError
from mcpmgr.platforms import ALL_PLATFORMS, app_support_dir, get_platform, platform_names


def test_catalog_names():
    """Test every supported tool is present, in display order."""
    assert platform_names() == [
        "claude",
        "gemini",
        "codex",
        "copilot",
        "vscode",
        "cursor",
        "vscode-insiders",
        "windsurf",
    ]


def test_catalog_names_are_unique():
    names = [platform.name for platform in ALL_PLATFORMS]
    assert len(names) == len(set(names))


@pytest.mark.parametrize(
    ("name", "display_name", "config_key", "config_format"),
    [
        ("claude", "Claude Code", "mcpServers", "json"),
        ("gemini", "Gemini CLI", "mcpServers", "json"),
        ("codex", "Codex CLI", "mcp_servers", "toml"),
        ("copilot", "Copilot CLI", "mcpServers", "json"),
        ("vscode", "VS Code", "servers", "json"),
        ("cursor", "Cursor", "mcpServers", "json"),
        ("vscode-insiders", "VS Code Insiders", "servers", "json"),
        ("windsurf", "Windsurf", "mcpServers", "json"),
    ],
)
def test_catalog_entry(name, display_name, config_key, config_format):
    platform = get_platform(name)

    assert platform.display_name == display_name
    assert platform.config_key == config_key
    assert platform.format == config_format


def test_home_relative_default_paths():
    home = Path("/home/u")

    assert get_platform("claude").default_path(home) == Path("/home/u/.claude.json")
    assert get_platform("gemini").default_path(home) == Path("/home/u/.gemini/settings.json")
    assert get_platform("codex").default_path(home) == Path("/home/u/.codex/config.toml")
    assert get_platform("copilot").default_path(home) == Path("/home/u/.copilot/mcp-config.json")
    assert get_platform("windsurf").default_path(home) == Path(
        "/home/u/.codeium/windsurf/mcp_config.json"
    )


def test_editor_default_paths():
    home = Path("/home/u")
    base = app_support_dir(home)

    assert get_platform("vscode").default_path(home) == base / "Code" / "User" / "mcp.json"
    assert get_platform("cursor").default_path(home) == base / "Cursor" / "User" / "mcp.json"
    assert get_platform("vscode-insiders").default_path(home) == (
        base / "Code - Insiders" / "User" / "mcp.json"
    )


@pytest.mark.skipif(sys.platform in ("darwin", "win32"), reason="Linux layout")
def test_app_support_dir_linux():
    assert app_support_dir(Path("/home/u")) == Path("/home/u/.config")


def test_app_support_dir_macos(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    assert app_support_dir(Path("/Users/u")) == Path("/Users/u/Library/Application Support")


def test_unknown_platform():
    with pytest.raises(UnknownPlatformError, match="Unknown tool: emacs"):
        get_platform("emacs")
