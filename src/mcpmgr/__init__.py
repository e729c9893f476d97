# mcpmgr - MCP server config manager
# ABOUTME: Version information
__version__ = "0.1.0"

# ABOUTME: Export core data models and errors
from mcpmgr.errors import (
    BackupFormatError,
    McpManagerError,
    ServerNotFoundError,
    UnknownPlatformError,
)
from mcpmgr.models import BackupData, BackupInfo, MCPServer, Platform, PlatformInfo, Settings

# ABOUTME: Export settings, registry and operations
from mcpmgr.config import SettingsStore
from mcpmgr.registry import ServerRegistry
from mcpmgr.sync import (
    add_or_update_server,
    delete_server,
    export_configs,
    import_configs,
    merge_servers,
    sync_servers,
    toggle_server,
)
from mcpmgr.utils import BackupStore

__all__ = [
    "__version__",
    "BackupData",
    "BackupFormatError",
    "BackupInfo",
    "BackupStore",
    "MCPServer",
    "McpManagerError",
    "Platform",
    "PlatformInfo",
    "ServerNotFoundError",
    "ServerRegistry",
    "Settings",
    "SettingsStore",
    "UnknownPlatformError",
    "add_or_update_server",
    "delete_server",
    "export_configs",
    "import_configs",
    "merge_servers",
    "sync_servers",
    "toggle_server",
]
