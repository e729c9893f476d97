# Tests for the TOML platform config format (Codex CLI)
from pathlib import Path

import pytest
import tomli

from mcpmgr.models import MCPServer
from mcpmgr.platforms.toml_format import read_toml_servers, write_toml_servers


def test_toml_load_missing_file(tmp_path: Path) -> None:
    """Test loading when config doesn't exist."""
    assert read_toml_servers(tmp_path / "config.toml") == []


def test_toml_load_invalid_toml(tmp_path: Path) -> None:
    """Test invalid TOML degrades to an empty list."""
    config_file = tmp_path / "config.toml"
    config_file.write_text("invalid [toml")

    assert read_toml_servers(config_file) == []


def test_toml_load_servers(tmp_path: Path) -> None:
    """Test loading existing servers from config."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """model = "o3"

[mcp_servers.filesystem]
command = "npx"
args = ["-y", "@modelcontextprotocol/server-filesystem", "/projects"]

[mcp_servers.github]
command = "npx"
args = ["-y", "@modelcontextprotocol/server-github"]
env = { GITHUB_TOKEN = "ghp_xxxx" }

[mcp_servers.remote]
url = "http://localhost:8080/sse"
disabled = true
"""
    )

    servers = read_toml_servers(config_file)

    assert servers == [
        MCPServer(
            name="filesystem",
            type="stdio",
            command="npx",
            args=["-y", "@modelcontextprotocol/server-filesystem", "/projects"],
        ),
        MCPServer(
            name="github",
            type="stdio",
            command="npx",
            args=["-y", "@modelcontextprotocol/server-github"],
            env={"GITHUB_TOKEN": "ghp_xxxx"},
        ),
        MCPServer(name="remote", type="sse", url="http://localhost:8080/sse", enabled=False),
    ]


def test_toml_load_ignores_other_keys(tmp_path: Path) -> None:
    """Test TOML has no fallback chain: only [mcp_servers] is read."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """[mcpServers.a]
command = "a"

[servers.b]
command = "b"
"""
    )

    assert read_toml_servers(config_file) == []


def test_toml_save_creates_file(tmp_path: Path) -> None:
    """Test saving creates config file if missing."""
    config_file = tmp_path / ".codex" / "config.toml"

    write_toml_servers(config_file, [MCPServer(name="filesystem", type="stdio", command="npx")])

    assert config_file.exists()
    content = config_file.read_text()
    assert "[mcp_servers.filesystem]" in content
    assert 'command = "npx"' in content


def test_toml_save_preserves_other_settings(tmp_path: Path) -> None:
    """Test saving keeps unrelated tables and keys untouched."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """model = "o3"
approval_policy = "on-request"

[profiles.fast]
model = "o4-mini"

[mcp_servers.old]
command = "old"
"""
    )

    write_toml_servers(config_file, [MCPServer(name="new", type="stdio", command="new")])

    data = tomli.loads(config_file.read_text())
    assert data["model"] == "o3"
    assert data["approval_policy"] == "on-request"
    assert data["profiles"] == {"fast": {"model": "o4-mini"}}
    assert data["mcp_servers"] == {"new": {"command": "new"}}


def test_toml_save_field_rules(tmp_path: Path) -> None:
    """Test stdio/sse field selection, empty omission and disabled flag."""
    config_file = tmp_path / "config.toml"

    write_toml_servers(
        config_file,
        [
            MCPServer(name="fs", type="stdio", command="npx"),
            MCPServer(name="api", type="sse", command="dropped", url="http://api", enabled=False),
            MCPServer(name="gh", type="stdio", command="npx", args=["-y"], env={"TOKEN": "t"}),
        ],
    )

    data = tomli.loads(config_file.read_text())["mcp_servers"]
    assert data["fs"] == {"command": "npx"}
    assert data["api"] == {"url": "http://api", "disabled": True}
    assert data["gh"] == {"command": "npx", "args": ["-y"], "env": {"TOKEN": "t"}}


def test_toml_save_orders_servers_by_name(tmp_path: Path) -> None:
    """Test server tables are written in name order."""
    config_file = tmp_path / "config.toml"

    write_toml_servers(
        config_file,
        [MCPServer(name="zeta", command="z"), MCPServer(name="alpha", command="a")],
    )

    assert [s.name for s in read_toml_servers(config_file)] == ["alpha", "zeta"]


def test_toml_save_escapes_special_characters(tmp_path: Path) -> None:
    """Test quotes, backslashes and odd server names survive a write."""
    config_file = tmp_path / "config.toml"
    server = MCPServer(
        name="my server.v2",
        type="stdio",
        command='C:\\tools\\run "mcp"',
        args=["--flag=\"x\""],
    )

    write_toml_servers(config_file, [server])

    assert read_toml_servers(config_file) == [server]


def test_toml_round_trip(tmp_path: Path) -> None:
    """Test writing then reading returns the same servers."""
    config_file = tmp_path / "config.toml"
    servers = [
        MCPServer(name="a", type="stdio", command="npx", args=["-y", "a"], env={"K": "v"}),
        MCPServer(name="b", type="sse", url="http://b", enabled=False),
        MCPServer(name="c", type="sse", url="http://c", env={"TOKEN": "t"}),
    ]

    write_toml_servers(config_file, servers)

    assert read_toml_servers(config_file) == servers


def test_toml_output_is_stable(tmp_path: Path) -> None:
    """Test repeated writes of the same data produce identical bytes."""
    config_file = tmp_path / "config.toml"
    config_file.write_text('model = "o3"\n')
    servers = [MCPServer(name="b", command="b"), MCPServer(name="a", command="a", args=["x"])]

    write_toml_servers(config_file, servers)
    first = config_file.read_bytes()
    write_toml_servers(config_file, read_toml_servers(config_file))

    assert config_file.read_bytes() == first


def test_toml_save_failure_leaves_file_untouched(tmp_path: Path) -> None:
    """Test a server that cannot be serialized does not truncate the config."""
    config_file = tmp_path / "config.toml"
    config_file.write_text('model = "o3"\n\n[mcp_servers.a]\ncommand = "a"\n')
    before = config_file.read_text()

    with pytest.raises(TypeError):
        write_toml_servers(config_file, [MCPServer(name="x", command="x", env={"K": object()})])

    assert config_file.read_text() == before
