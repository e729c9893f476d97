# Sync orchestration for mcpmgr
import dataclasses
import logging
from collections.abc import Iterable

from mcpmgr.errors import ServerNotFoundError
from mcpmgr.models import BackupData, MCPServer
from mcpmgr.registry import ServerRegistry
from mcpmgr.utils.backup import current_timestamp

logger = logging.getLogger(__name__)


def merge_servers(target: list[MCPServer], source: Iterable[MCPServer]) -> list[MCPServer]:
    """Merge source servers into target by name.

    ABOUTME: Same-name servers are replaced in place (whole record, no field merge)
    ABOUTME: New names are appended in source order
    ABOUTME: Returns new list (doesn't mutate inputs)

    Args:
        target: Servers currently held by the destination
        source: Servers to bring in

    Returns:
        Merged list

    Examples:
        >>> target = [MCPServer(name="a", command="old", enabled=False), MCPServer(name="b", command="npx")]
        >>> merged = merge_servers(target, [MCPServer(name="a", command="new")])
        >>> [(s.name, s.command) for s in merged]
        [('a', 'new'), ('b', 'npx')]
    """
    result = list(target)
    positions = {server.name: idx for idx, server in enumerate(result)}

    for server in source:
        idx = positions.get(server.name)
        if idx is not None:
            result[idx] = server
        else:
            positions[server.name] = len(result)
            result.append(server)

    return result


def sync_servers(
    registry: ServerRegistry,
    from_name: str,
    to_name: str,
    server_names: Iterable[str] | None = None,
) -> int:
    """Copy servers from one platform into another.

    ABOUTME: Optional server_names limits which source servers are copied
    ABOUTME: Names missing from the source are ignored
    ABOUTME: Returns how many servers were merged into the destination

    Raises:
        UnknownPlatformError: If to_name is not in the catalog
        OSError: If the destination cannot be written
    """
    from_servers = registry.read_servers(from_name)
    to_servers = registry.read_servers(to_name)

    if server_names is not None:
        wanted = set(server_names)
        from_servers = [server for server in from_servers if server.name in wanted]

    merged = merge_servers(to_servers, from_servers)
    registry.write_servers(to_name, merged)

    logger.info(f"Synced {len(from_servers)} server(s) from {from_name} to {to_name}")
    return len(from_servers)


def add_or_update_server(registry: ServerRegistry, name: str, server: MCPServer) -> list[MCPServer]:
    """Add a server to a platform, replacing any server with the same name.

    Returns:
        The platform's full server list after the write
    """
    servers = merge_servers(registry.read_servers(name), [server])
    registry.write_servers(name, servers)
    return servers


def delete_server(registry: ServerRegistry, name: str, server_name: str) -> list[MCPServer]:
    """Remove a server by name; absent names are not an error.

    Returns:
        The platform's full server list after the write
    """
    servers = [server for server in registry.read_servers(name) if server.name != server_name]
    registry.write_servers(name, servers)
    return servers


def toggle_server(registry: ServerRegistry, name: str, server_name: str) -> MCPServer:
    """Flip the enabled flag of a server.

    Returns:
        The updated server

    Raises:
        ServerNotFoundError: If no server on the platform has that name
    """
    servers = registry.read_servers(name)

    for idx, server in enumerate(servers):
        if server.name == server_name:
            toggled = dataclasses.replace(server, enabled=not server.enabled)
            servers[idx] = toggled
            registry.write_servers(name, servers)
            return toggled

    raise ServerNotFoundError(server_name)


def import_configs(
    registry: ServerRegistry,
    tools: dict[str, list[MCPServer]],
    merge: bool,
) -> list[str]:
    """Write a bundle of servers into one or more platforms.

    ABOUTME: merge=True merges by name, merge=False replaces each list wholesale
    ABOUTME: Stops at the first failing platform; earlier writes are kept

    Returns:
        Names of platforms written, in bundle order
    """
    imported: list[str] = []

    for name, servers in tools.items():
        if merge:
            final_servers = merge_servers(registry.read_servers(name), servers)
        else:
            final_servers = list(servers)

        registry.write_servers(name, final_servers)
        imported.append(name)

    logger.info(f"Imported servers into {len(imported)} tool(s) ({'merge' if merge else 'replace'})")
    return imported


def export_configs(registry: ServerRegistry) -> BackupData:
    """Snapshot every platform's servers without writing anything."""
    return BackupData(timestamp=current_timestamp(), tools=registry.read_all())
