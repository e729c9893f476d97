# ABOUTME: Snapshot backups of every platform's MCP servers.
# ABOUTME: One JSON bundle per backup, named backup-{YYYY-MM-DDTHH-MM-SS}.json.
import json
import logging
import os
from datetime import datetime
from pathlib import Path

from mcpmgr.config import get_config_dir
from mcpmgr.errors import BackupFormatError
from mcpmgr.models import BackupData, BackupInfo
from mcpmgr.registry import ServerRegistry

logger = logging.getLogger(__name__)

# ABOUTME: Backup file naming: {prefix}{timestamp}{suffix}
BACKUP_PREFIX = "backup-"
BACKUP_SUFFIX = ".json"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"


def current_timestamp() -> str:
    """Return local time formatted for bundle timestamps.

    Examples:
        >>> current_timestamp()
        '2026-01-08T14-30-22'
    """
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def get_backup_dir() -> Path:
    """Get the default backup directory path.

    ABOUTME: Returns ~/.mcp-manager/backups
    ABOUTME: Does not create the directory
    """
    return get_config_dir() / "backups"


def backup_filename(timestamp: str) -> str:
    return f"{BACKUP_PREFIX}{timestamp}{BACKUP_SUFFIX}"


def timestamp_from_filename(filename: str) -> str:
    """Strip the backup prefix and suffix from a file name.

    Examples:
        >>> timestamp_from_filename("backup-2024-01-01T00-00-00.json")
        '2024-01-01T00-00-00'
    """
    return filename.replace(BACKUP_PREFIX, "").replace(BACKUP_SUFFIX, "")


class BackupStore:
    """Creates, lists, restores and deletes backup bundles.

    ABOUTME: Bundles are immutable once written
    ABOUTME: Restore is a full replace per platform, never a merge
    """

    def __init__(self, registry: ServerRegistry, backup_dir: Path | None = None) -> None:
        """Initialize store with optional custom backup directory.

        ABOUTME: Defaults to ~/.mcp-manager/backups if not provided
        """
        self.registry = registry
        self._backup_dir = backup_dir

    @property
    def backup_dir(self) -> Path:
        return self._backup_dir if self._backup_dir else get_backup_dir()

    def _path_for(self, filename: str) -> Path:
        """Map a bare backup file name to its path.

        Raises:
            ValueError: If filename contains a directory component
        """
        if not filename or Path(filename).name != filename:
            raise ValueError(f"Invalid backup file name: {filename!r}")
        return self.backup_dir / filename

    def create(self) -> BackupInfo:
        """Capture every platform's servers into a new backup file.

        ABOUTME: Creates the backup directory if it doesn't exist
        ABOUTME: Writes to a temporary file first, then renames into place

        Returns:
            BackupInfo for the new file

        Raises:
            FileExistsError: If a backup with the same timestamp already exists
            OSError: If the backup cannot be written
        """
        backup_dir = self.backup_dir
        backup_dir.mkdir(parents=True, exist_ok=True)

        timestamp = current_timestamp()
        filename = backup_filename(timestamp)
        path = backup_dir / filename
        if path.exists():
            raise FileExistsError(f"Backup already exists: {path}")

        backup_data = BackupData(timestamp=timestamp, tools=self.registry.read_all())

        tmp_path = path.with_name(path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(backup_data.to_dict(), f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_path, path)

        logger.info(f"Created backup {path}")
        return BackupInfo(name=filename, timestamp=timestamp)

    def list_backups(self) -> list[BackupInfo]:
        """List backup files, newest first.

        ABOUTME: Only *.json files are considered
        ABOUTME: Returns [] when the backup directory doesn't exist
        """
        backup_dir = self.backup_dir
        if not backup_dir.exists():
            return []

        backups = [
            BackupInfo(name=file_path.name, timestamp=timestamp_from_filename(file_path.name))
            for file_path in backup_dir.iterdir()
            if file_path.is_file() and file_path.suffix == BACKUP_SUFFIX
        ]
        backups.sort(key=lambda backup: backup.name, reverse=True)
        return backups

    def load(self, filename: str) -> BackupData:
        """Read a backup bundle.

        Raises:
            FileNotFoundError: If the backup doesn't exist
            BackupFormatError: If the file is not a valid bundle
        """
        path = self._path_for(filename)

        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise BackupFormatError(f"Invalid JSON in {path}: {e}") from e
            except UnicodeDecodeError as e:
                raise BackupFormatError(f"Backup {path} is not UTF-8 text: {e}") from e

        try:
            return BackupData.from_dict(data)
        except ValueError as e:
            raise BackupFormatError(f"Invalid backup {path}: {e}") from e

    def restore(self, filename: str, tools: list[str] | None = None) -> list[str]:
        """Overwrite platform configs with the servers stored in a backup.

        ABOUTME: tools limits which platforms are restored; None restores all
        ABOUTME: Stops at the first failing platform; earlier writes are kept

        Returns:
            Names of platforms written
        """
        backup = self.load(filename)

        restored: list[str] = []
        for name, servers in backup.tools.items():
            if tools is not None and name not in tools:
                continue

            self.registry.write_servers(name, servers)
            restored.append(name)

        logger.info(f"Restored {len(restored)} tool(s) from {filename}")
        return restored

    def delete(self, filename: str) -> None:
        """Delete a backup file.

        Raises:
            FileNotFoundError: If the backup doesn't exist
        """
        path = self._path_for(filename)
        path.unlink()
        logger.info(f"Deleted backup {path}")
