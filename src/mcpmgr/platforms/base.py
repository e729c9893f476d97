# Platform format base utilities
import json
from pathlib import Path
from typing import Any

from mcpmgr.models import MCPServer


def read_json_file(path: Path) -> dict[str, Any]:
    """Read a JSON document expected to hold an object.

    ABOUTME: Returns empty dict if file doesn't exist
    ABOUTME: Raises ValueError for invalid JSON or a non-object document
    ABOUTME: OSError from reading propagates to the caller
    """
    if not path.exists():
        return {}

    with open(path, encoding="utf-8") as f:
        try:
            result = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(result, dict):
        raise ValueError(f"Expected a JSON object in {path}, got {type(result).__name__}")
    return result


def write_json_file(path: Path, data: dict[str, Any]) -> None:
    """Write JSON file with error handling.

    ABOUTME: Creates parent directories if needed
    ABOUTME: Serializes fully before opening the file so a failure leaves it untouched
    ABOUTME: Keys keep their document order; 2-space indentation
    """
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def server_to_dict(server: MCPServer) -> dict[str, Any]:
    """Convert MCPServer to the attribute dict stored in platform configs.

    ABOUTME: Writes command/args for stdio and url for sse, chosen by server.type
    ABOUTME: Omits empty args and env; writes disabled only when true
    """
    result: dict[str, Any] = {}

    if server.type == "stdio":
        result["command"] = server.command
        if server.args:
            result["args"] = list(server.args)
    else:
        result["url"] = server.url

    if server.env:
        result["env"] = dict(server.env)

    if not server.enabled:
        result["disabled"] = True

    return result


def dict_to_server(name: str, data: Any) -> MCPServer:
    """Convert a platform attribute dict to MCPServer.

    ABOUTME: Never fails: wrong-shaped fields fall back to their defaults
    ABOUTME: type is stdio when a non-empty command is present, sse otherwise
    """
    if not isinstance(data, dict):
        data = {}

    command = data.get("command")
    command = command if isinstance(command, str) else ""

    url = data.get("url")
    url = url if isinstance(url, str) else ""

    raw_args = data.get("args")
    args = [arg for arg in raw_args if isinstance(arg, str)] if isinstance(raw_args, list) else []

    raw_env = data.get("env")
    env = (
        {key: value for key, value in raw_env.items() if isinstance(value, str)}
        if isinstance(raw_env, dict)
        else {}
    )

    disabled = data.get("disabled")
    enabled = not (disabled if isinstance(disabled, bool) else False)

    return MCPServer(
        name=name,
        type="stdio" if command else "sse",
        command=command,
        args=args,
        env=env,
        url=url,
        enabled=enabled,
    )


def servers_to_table(servers: list[MCPServer]) -> dict[str, dict[str, Any]]:
    """Build the name -> attributes container written under a platform's key.

    ABOUTME: Entries are ordered by server name for stable output
    """
    table = {server.name: server_to_dict(server) for server in servers}
    return {name: table[name] for name in sorted(table)}
