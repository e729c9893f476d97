# ABOUTME: Utility modules for mcpmgr
# ABOUTME: Exports backup bundle store and helpers

from mcpmgr.utils.backup import BackupStore, current_timestamp, get_backup_dir

__all__ = [
    "BackupStore",
    "current_timestamp",
    "get_backup_dir",
]
