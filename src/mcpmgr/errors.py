# ABOUTME: Exception types raised by mcpmgr operations
# ABOUTME: I/O failures are not wrapped; they surface as OSError


class McpManagerError(Exception):
    """Base class for mcpmgr errors."""


class UnknownPlatformError(McpManagerError, ValueError):
    """Raised when a platform name is not in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ServerNotFoundError(McpManagerError, LookupError):
    """Raised when a named server is absent from a platform config."""

    def __init__(self, server_name: str) -> None:
        super().__init__(f"Server not found: {server_name}")
        self.server_name = server_name


class BackupFormatError(McpManagerError, ValueError):
    """Raised when a backup or import bundle cannot be parsed."""
