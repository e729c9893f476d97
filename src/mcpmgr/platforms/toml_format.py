# TOML platform config format (Codex CLI)
import logging
from pathlib import Path
from typing import Any

import tomli
import tomli_w

from mcpmgr.models import MCPServer
from mcpmgr.platforms.base import dict_to_server, servers_to_table

logger = logging.getLogger(__name__)

# ABOUTME: TOML platforms always keep servers under this table (snake_case)
TOML_SERVERS_KEY = "mcp_servers"


def read_toml_file(path: Path) -> dict[str, Any]:
    """Read a TOML document.

    ABOUTME: Returns empty dict if file doesn't exist
    ABOUTME: Raises ValueError for invalid TOML
    """
    if not path.exists():
        return {}

    with open(path, "rb") as f:
        try:
            return tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e


def read_toml_servers(path: Path) -> list[MCPServer]:
    """Load MCP servers from the [mcp_servers] table of a TOML config.

    ABOUTME: Returns empty list if the file is missing, unreadable or invalid
    ABOUTME: No fallback keys: TOML platforms use one canonical table
    """
    try:
        data = read_toml_file(path)
    except (OSError, ValueError) as e:
        logger.debug(f"Ignoring unreadable TOML config {path}: {e}")
        return []

    mcp_servers = data.get(TOML_SERVERS_KEY)
    if not isinstance(mcp_servers, dict):
        return []

    return [dict_to_server(name, server_data) for name, server_data in mcp_servers.items()]


def write_toml_servers(path: Path, servers: list[MCPServer]) -> None:
    """Save MCP servers into the [mcp_servers] table of a TOML config.

    ABOUTME: Preserves every other table and key of an existing document
    ABOUTME: Server tables are written in name order for stable output
    ABOUTME: Serializes before opening the file so a failure leaves it untouched
    ABOUTME: Creates the file and its parent directories if missing

    Raises:
        OSError: If the existing file cannot be read or the new one written
    """
    try:
        existing_data = read_toml_file(path)
    except ValueError as e:
        logger.warning(f"Overwriting invalid TOML config {path}: {e}")
        existing_data = {}

    existing_data[TOML_SERVERS_KEY] = servers_to_table(servers)
    content = tomli_w.dumps(existing_data)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.debug(f"Wrote {len(servers)} server(s) to {path} under '{TOML_SERVERS_KEY}'")
