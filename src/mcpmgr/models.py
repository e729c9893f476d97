# Core data models for mcpmgr
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

ServerType = Literal["stdio", "sse"]
ConfigFormat = Literal["json", "toml"]


@dataclass(frozen=True)
class MCPServer:
    """Immutable MCP server definition as managed for a single platform.

    ABOUTME: Name is the identity key for every merge operation
    ABOUTME: type is derived from command on read, trusted as given on write
    """
    name: str
    type: ServerType = "stdio"
    command: str = ""
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    url: str = ""
    enabled: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to the bundle JSON shape used by backups and exports."""
        return {
            "name": self.name,
            "type": self.type,
            "command": self.command,
            "args": list(self.args),
            "env": dict(self.env),
            "url": self.url,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MCPServer":
        """Create MCPServer from the bundle JSON shape.

        ABOUTME: Missing or null optional fields take their defaults
        ABOUTME: Raises ValueError when a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Server entry must be an object, got {type(data).__name__}")
        if "name" not in data:
            raise ValueError("Server entry missing required 'name' field")

        name = data["name"]
        if not isinstance(name, str):
            raise ValueError(f"Server 'name' must be a string, got {type(name).__name__}")

        command = _bundle_field(data, "command", str, "")
        url = _bundle_field(data, "url", str, "")
        enabled = _bundle_field(data, "enabled", bool, True)

        args = _bundle_field(data, "args", list, [])
        if not all(isinstance(arg, str) for arg in args):
            raise ValueError(f"Server '{name}' field 'args' must be a list of strings")

        env = _bundle_field(data, "env", dict, {})
        if not all(isinstance(key, str) and isinstance(value, str) for key, value in env.items()):
            raise ValueError(f"Server '{name}' field 'env' must map strings to strings")

        server_type = _bundle_field(data, "type", str, "") or ("stdio" if command else "sse")
        if server_type not in ("stdio", "sse"):
            raise ValueError(
                f"Server '{name}' has invalid type '{server_type}'. Must be 'stdio' or 'sse'."
            )

        return cls(
            name=name,
            type=server_type,
            command=command,
            args=list(args),
            env=dict(env),
            url=url,
            enabled=enabled,
        )


def _bundle_field(data: dict[str, Any], key: str, expected: type, default: Any) -> Any:
    """Fetch an optional bundle field, rejecting values of the wrong type."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, expected):
        raise ValueError(
            f"Server '{data['name']}' field '{key}' must be {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class Platform:
    """Static description of one supported host application.

    ABOUTME: path_fn maps the home directory to the default config file
    ABOUTME: config_key and format never change with a path override
    """
    name: str
    display_name: str
    config_key: str
    format: ConfigFormat
    path_fn: Callable[[Path], Path]

    def default_path(self, home: Path) -> Path:
        return self.path_fn(home)


@dataclass
class Settings:
    """User settings persisted in ~/.mcp-manager/settings.json.

    ABOUTME: custom_paths maps platform name to an override path string
    """
    custom_paths: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PlatformInfo:
    """Resolved view of a platform for listings."""
    name: str
    display_name: str
    config_path: str
    config_key: str
    exists: bool
    is_custom_path: bool


@dataclass(frozen=True)
class BackupInfo:
    """Backup file name and the timestamp embedded in it."""
    name: str
    timestamp: str


@dataclass
class BackupData:
    """Snapshot of every platform's servers at one point in time.

    ABOUTME: Shared by backups, exports and imports
    ABOUTME: JSON shape is {"timestamp": str, "tools": {platform: [server, ...]}}
    """
    timestamp: str
    tools: dict[str, list[MCPServer]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "tools": {
                name: [server.to_dict() for server in servers]
                for name, servers in self.tools.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BackupData":
        """Create BackupData from its JSON shape.

        Raises:
            ValueError: If the document does not have the bundle shape
        """
        if not isinstance(data, dict):
            raise ValueError("Bundle must be a JSON object")

        tools_data = data.get("tools", {})
        if not isinstance(tools_data, dict):
            raise ValueError("Bundle 'tools' must be an object keyed by platform")

        tools: dict[str, list[MCPServer]] = {}
        for name, servers in tools_data.items():
            if not isinstance(servers, list):
                raise ValueError(f"Bundle entry for '{name}' must be a list of servers")
            tools[name] = [MCPServer.from_dict(server) for server in servers]

        return cls(timestamp=str(data.get("timestamp", "")), tools=tools)
