# JSON platform config format
import logging
from pathlib import Path
from typing import Any

from mcpmgr.models import MCPServer
from mcpmgr.platforms.base import dict_to_server, read_json_file, servers_to_table, write_json_file

logger = logging.getLogger(__name__)

# ABOUTME: Container keys tried after the platform's own key, in this order
FALLBACK_KEYS = ("mcpServers", "servers")


def find_servers_table(data: dict[str, Any], key: str) -> dict[str, Any] | None:
    """Locate the server map in a parsed document.

    ABOUTME: Tries key, then mcpServers, then servers
    ABOUTME: Skips keys whose value is not an object
    """
    for candidate in (key, *FALLBACK_KEYS):
        value = data.get(candidate)
        if isinstance(value, dict):
            return value
    return None


def read_json_servers(path: Path, key: str) -> list[MCPServer]:
    """Load MCP servers from a JSON platform config.

    ABOUTME: Returns empty list if the file is missing, unreadable or invalid
    ABOUTME: A platform that was never configured is not an error

    Args:
        path: Path to the platform config file
        key: The platform's container key (e.g. mcpServers)

    Returns:
        Servers in document order
    """
    try:
        data = read_json_file(path)
    except (OSError, ValueError) as e:
        logger.debug(f"Ignoring unreadable JSON config {path}: {e}")
        return []

    mcp_servers = find_servers_table(data, key)
    if mcp_servers is None:
        return []

    return [dict_to_server(name, server_data) for name, server_data in mcp_servers.items()]


def write_json_servers(path: Path, key: str, servers: list[MCPServer]) -> None:
    """Save MCP servers into a JSON platform config.

    ABOUTME: Preserves every other top-level key of an existing document
    ABOUTME: An existing but unparseable document is replaced by a fresh one
    ABOUTME: Creates the file and its parent directories if missing

    Raises:
        OSError: If the existing file cannot be read or the new one written
    """
    try:
        existing_data = read_json_file(path)
    except ValueError as e:
        logger.warning(f"Overwriting invalid JSON config {path}: {e}")
        existing_data = {}

    existing_data[key] = servers_to_table(servers)

    write_json_file(path, existing_data)
    logger.debug(f"Wrote {len(servers)} server(s) to {path} under '{key}'")
