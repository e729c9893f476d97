# CLI interface for mcpmgr
import argparse
import json
import logging
import sys
from pathlib import Path

from mcpmgr import __version__
from mcpmgr.config import SettingsStore
from mcpmgr.errors import ServerNotFoundError
from mcpmgr.models import BackupData, MCPServer
from mcpmgr.platforms import get_platform, platform_names
from mcpmgr.registry import ServerRegistry
from mcpmgr.sync import (
    add_or_update_server,
    delete_server,
    export_configs,
    import_configs,
    sync_servers,
    toggle_server,
)
from mcpmgr.utils.backup import BackupStore

# ABOUTME: Exit codes
# 0 = success, 2 = bad input (unknown tool, missing server, invalid file), 3 = fatal
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _split_list(value: str | None) -> list[str]:
    """Split a comma-separated option into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_env(value: str | None) -> dict[str, str]:
    """Parse comma-separated KEY=VALUE pairs; pairs without '=' are skipped."""
    env_vars: dict[str, str] = {}
    for env_pair in _split_list(value):
        if "=" in env_pair:
            key, val = env_pair.split("=", 1)
            env_vars[key.strip()] = val.strip()
    return env_vars


def _print_server(server: MCPServer) -> None:
    status = "" if server.enabled else " (disabled)"
    print(f"  {server.name}{status}")
    print(f"    type: {server.type}")

    if server.type == "stdio":
        print(f"    command: {server.command}")
        if server.args:
            print(f"    args: {' '.join(server.args)}")
    elif server.url:
        print(f"    url: {server.url}")

    if server.env:
        env_str = ", ".join(f"{k}={v}" for k, v in server.env.items())
        print(f"    env: {env_str}")


def _registry() -> ServerRegistry:
    return ServerRegistry(SettingsStore())


def cmd_platforms(args: argparse.Namespace) -> int:
    """Execute platforms command.

    ABOUTME: Shows every supported tool with its resolved config file
    """
    for info in _registry().list_platforms():
        marker = "✓" if info.exists else "✗"
        custom = " (custom path)" if info.is_custom_path else ""
        print(f"{marker} {info.name:<16} {info.display_name}")
        print(f"    {info.config_path} [{info.config_key}]{custom}")
    return EXIT_SUCCESS


def cmd_path(args: argparse.Namespace) -> int:
    """Execute path command.

    ABOUTME: Without a path, prints the resolved path
    ABOUTME: With a path (or --reset), stores or clears the override
    """
    registry = _registry()

    try:
        if args.reset or args.path is not None:
            new_path = "" if args.reset else args.path
            registry.settings_store.set_custom_path(args.tool, new_path)

        resolved = registry.resolve(args.tool)
        print(f"{args.tool}: {resolved.path}")
        return EXIT_SUCCESS

    except OSError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def cmd_list(args: argparse.Namespace) -> int:
    """Execute list command.

    ABOUTME: Lists servers for one tool, or every tool when none is given
    """
    registry = _registry()
    names = [args.tool] if args.tool else platform_names()

    total = 0
    for name in names:
        servers = registry.read_servers(name)
        total += len(servers)
        print(f"{get_platform(name).display_name} ({len(servers)} server(s)):")
        for server in servers:
            _print_server(server)
        print()

    print(f"Total: {total} server(s)")
    return EXIT_SUCCESS


def cmd_add(args: argparse.Namespace) -> int:
    """Execute add command.

    ABOUTME: --command creates a stdio server, --url an sse server
    ABOUTME: Replaces an existing server with the same name
    """
    if args.command:
        server = MCPServer(
            name=args.server,
            type="stdio",
            command=args.command,
            args=_split_list(args.args),
            env=_parse_env(args.env),
            enabled=not args.disabled,
        )
    else:
        server = MCPServer(
            name=args.server,
            type="sse",
            url=args.url,
            env=_parse_env(args.env),
            enabled=not args.disabled,
        )

    try:
        servers = add_or_update_server(_registry(), args.tool, server)
        print(f"Server '{server.name}' saved to {args.tool} ({len(servers)} server(s) total).")
        return EXIT_SUCCESS
    except OSError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def cmd_remove(args: argparse.Namespace) -> int:
    """Execute remove command."""
    try:
        servers = delete_server(_registry(), args.tool, args.server)
        print(f"Server '{args.server}' removed from {args.tool} ({len(servers)} server(s) left).")
        return EXIT_SUCCESS
    except OSError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def cmd_toggle(args: argparse.Namespace) -> int:
    """Execute toggle command."""
    try:
        server = toggle_server(_registry(), args.tool, args.server)
        state = "enabled" if server.enabled else "disabled"
        print(f"Server '{server.name}' is now {state} in {args.tool}.")
        return EXIT_SUCCESS
    except ServerNotFoundError as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except OSError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def cmd_sync(args: argparse.Namespace) -> int:
    """Execute sync command.

    ABOUTME: Merges servers from one tool into another by name
    """
    server_names = _split_list(args.servers) if args.servers else None

    try:
        count = sync_servers(_registry(), args.source, args.target, server_names)
        print(f"Synced {count} server(s) from {args.source} to {args.target}.")
        return EXIT_SUCCESS
    except OSError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def cmd_backup(args: argparse.Namespace) -> int:
    """Execute backup subcommands (create, list, restore, delete)."""
    store = BackupStore(_registry())

    try:
        if args.action == "create":
            backup = store.create()
            print(f"Created backup {backup.name}")

        elif args.action == "list":
            backups = store.list_backups()
            for backup in backups:
                print(f"  {backup.name}  ({backup.timestamp})")
            print(f"Total: {len(backups)} backup(s)")

        elif args.action == "restore":
            tools = _split_list(args.tools) if args.tools else None
            restored = store.restore(args.filename, tools)
            print(f"Restored {len(restored)} tool(s): {', '.join(restored)}")

        elif args.action == "delete":
            store.delete(args.filename)
            print(f"Deleted backup {args.filename}")

        return EXIT_SUCCESS

    except FileNotFoundError as e:
        print(f"Error: Backup not found: {e.filename}")
        return EXIT_CONFIG_ERROR
    except FileExistsError as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except ValueError as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except OSError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def cmd_export(args: argparse.Namespace) -> int:
    """Execute export command.

    ABOUTME: Writes the bundle to --output, or to stdout
    """
    content = json.dumps(export_configs(_registry()).to_dict(), indent=2, ensure_ascii=False) + "\n"

    if not args.output:
        sys.stdout.write(content)
        return EXIT_SUCCESS

    try:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
        print(f"Exported all tools to {output}")
        return EXIT_SUCCESS
    except OSError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def cmd_import(args: argparse.Namespace) -> int:
    """Execute import command.

    ABOUTME: Reads an exported bundle and merges (default) or replaces per tool
    """
    path = Path(args.file)

    try:
        with path.open("r", encoding="utf-8") as f:
            bundle = BackupData.from_dict(json.load(f))

        imported = import_configs(_registry(), bundle.tools, merge=not args.replace)
        mode = "replaced" if args.replace else "merged"
        print(f"Imported ({mode}) {len(imported)} tool(s): {', '.join(imported)}")
        return EXIT_SUCCESS

    except FileNotFoundError:
        print(f"Error: Import file not found: {path}")
        return EXIT_CONFIG_ERROR
    except ValueError as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except OSError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mcpmgr",
        description="Manage and sync MCP server configs across AI coding tools"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"mcpmgr v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="cmd", help="Available commands")
    tools = platform_names()

    subparsers.add_parser(
        "platforms",
        help="Show supported tools and their config files"
    )

    # path command
    path_parser = subparsers.add_parser(
        "path",
        help="Show or override a tool's config file path"
    )
    path_parser.add_argument("tool", choices=tools)
    path_parser.add_argument("path", nargs="?", help="New path (may start with ~)")
    path_parser.add_argument("--reset", action="store_true", help="Remove the override")

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List MCP servers for one or all tools"
    )
    list_parser.add_argument("tool", nargs="?", choices=tools)

    # add command
    add_parser = subparsers.add_parser(
        "add",
        help="Add or update an MCP server in a tool"
    )
    add_parser.add_argument("tool", choices=tools)
    add_parser.add_argument("server", help="Name of the MCP server")
    target = add_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--command", help="Command to run (stdio server)")
    target.add_argument("--url", help="URL endpoint (sse server)")
    add_parser.add_argument("--args", help="Comma-separated arguments (stdio server)")
    add_parser.add_argument("--env", help="Comma-separated KEY=VALUE environment variables")
    add_parser.add_argument("--disabled", action="store_true", help="Store the server disabled")

    # remove command
    remove_parser = subparsers.add_parser(
        "remove",
        help="Remove an MCP server from a tool"
    )
    remove_parser.add_argument("tool", choices=tools)
    remove_parser.add_argument("server", help="Name of the MCP server")

    # toggle command
    toggle_parser = subparsers.add_parser(
        "toggle",
        help="Enable or disable an MCP server"
    )
    toggle_parser.add_argument("tool", choices=tools)
    toggle_parser.add_argument("server", help="Name of the MCP server")

    # sync command
    sync_parser = subparsers.add_parser(
        "sync",
        help="Copy MCP servers from one tool to another"
    )
    sync_parser.add_argument("source", choices=tools)
    sync_parser.add_argument("target", choices=tools)
    sync_parser.add_argument("--servers", help="Comma-separated server names to copy")

    # backup command
    backup_parser = subparsers.add_parser(
        "backup",
        help="Create, list, restore or delete backups"
    )
    backup_actions = backup_parser.add_subparsers(dest="action", required=True)
    backup_actions.add_parser("create", help="Back up every tool's servers")
    backup_actions.add_parser("list", help="List backups")
    restore_parser = backup_actions.add_parser("restore", help="Restore a backup")
    restore_parser.add_argument("filename")
    restore_parser.add_argument("--tools", help="Comma-separated tools to restore")
    delete_parser = backup_actions.add_parser("delete", help="Delete a backup")
    delete_parser.add_argument("filename")

    # export command
    export_parser = subparsers.add_parser(
        "export",
        help="Export every tool's servers as JSON"
    )
    export_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    # import command
    import_parser = subparsers.add_parser(
        "import",
        help="Import servers from an exported JSON file"
    )
    import_parser.add_argument("file")
    import_parser.add_argument(
        "--replace",
        action="store_true",
        help="Replace each tool's servers instead of merging by name"
    )

    return parser


COMMANDS = {
    "platforms": cmd_platforms,
    "path": cmd_path,
    "list": cmd_list,
    "add": cmd_add,
    "remove": cmd_remove,
    "toggle": cmd_toggle,
    "sync": cmd_sync,
    "backup": cmd_backup,
    "export": cmd_export,
    "import": cmd_import,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    handler = COMMANDS.get(args.cmd)
    if handler is None:
        # No command specified, show help
        parser.print_help()
        return EXIT_SUCCESS

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
