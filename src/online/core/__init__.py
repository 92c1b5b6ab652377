"""Core utilities for online."""

from online.core.backup import (
    DEFAULT_KEEP_COUNT,
    atomic_write_text,
    cleanup_old_backups,
    create_backup,
    list_backups,
    safe_write_json,
)
from online.core.config import find_catalog_path, get_paths
from online.core.hashing import compute_hash
from online.core.report import IndentingReport, ReportLevel

__all__ = [
    # Backup
    "create_backup",
    "safe_write_json",
    "cleanup_old_backups",
    "list_backups",
    "DEFAULT_KEEP_COUNT",
    "atomic_write_text",
    # Hashing
    "compute_hash",
    # Report
    "IndentingReport",
    "ReportLevel",
    # Config
    "find_catalog_path",
    "get_paths",
]
