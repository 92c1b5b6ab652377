"""
Atomic catalog writes with rotated backups.

A dump never leaves a half-written catalog behind: the text is rendered
in full, written to a hidden sibling file and renamed over the target.
Before the target is replaced it is copied to `<stem>_<timestamp><suffix>`
in a backups directory, and only the newest few copies are kept.
"""

from __future__ import annotations

import json
import logging
import os
import re
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_KEEP_COUNT = 10
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
TIMESTAMP_PATTERN = re.compile(r"_(\d{8}_\d{6})\.")


def default_backup_dir(file_path: Path) -> Path:
    return Path(file_path).parent / "backups"


def parse_backup_timestamp(filename: str) -> datetime | None:
    """Read the timestamp out of a backup file name.

    Args:
        filename: Backup name like 'online.cache_20251212_144234.json'

    Returns:
        The timestamp, or None if the name carries no valid one
    """
    match = TIMESTAMP_PATTERN.search(filename)
    if match is None:
        return None
    try:
        return datetime.strptime(match.group(1), TIMESTAMP_FORMAT)
    except ValueError:
        return None


def list_backups(backup_dir: Path, stem: str) -> list[Path]:
    """Backups of one file, newest first. Unparseable names are skipped."""
    backup_dir = Path(backup_dir)
    if not backup_dir.is_dir():
        return []

    found = [
        (stamp, path)
        for path in backup_dir.glob(f"{stem}_*.json")
        if (stamp := parse_backup_timestamp(path.name)) is not None
    ]
    found.sort(reverse=True)
    return [path for _, path in found]


def create_backup(file_path: Path, backup_dir: Path | None = None) -> Path:
    """Copy a file into the backups directory under a timestamped name.

    Args:
        file_path: File about to be replaced
        backup_dir: Target directory (defaults to a backups/ dir beside the file)

    Returns:
        Path of the copy

    Raises:
        FileNotFoundError: If file_path does not exist
    """
    source = Path(file_path)
    if not source.exists():
        raise FileNotFoundError(f"Cannot backup non-existent file: {source}")

    target_dir = Path(backup_dir) if backup_dir else default_backup_dir(source)
    target_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime(TIMESTAMP_FORMAT)
    copy_path = target_dir / f"{source.stem}_{stamp}{source.suffix}"
    shutil.copy2(source, copy_path)
    logger.debug("Backed up %s to %s", source, copy_path)
    return copy_path


def cleanup_old_backups(
    backup_dir: Path,
    stem: str,
    keep_last: int = DEFAULT_KEEP_COUNT,
) -> list[Path]:
    """Delete all but the newest `keep_last` backups of one file.

    Returns:
        The deleted paths
    """
    stale = list_backups(backup_dir, stem)[keep_last:]
    for path in stale:
        path.unlink()
    if stale:
        logger.debug("Removed %d old backups of %s", len(stale), stem)
    return stale


def atomic_write_text(file_path: Path, text: str) -> None:
    """Replace a file's contents in one rename.

    Raises:
        OSError: If the file cannot be written; the old contents survive
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{file_path.name}.", suffix=".tmp", dir=file_path.parent, text=True
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as out:
            out.write(text)
            out.flush()
            os.fsync(out.fileno())
        tmp_path.replace(file_path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise OSError(f"Failed to write {file_path}: {e}") from e


def safe_write_json(
    file_path: Path,
    data: dict[str, Any],
    create_backup_first: bool = True,
    backup_dir: Path | None = None,
    indent: int = 2,
    keep_backups: int = DEFAULT_KEEP_COUNT,
) -> Path | None:
    """Write JSON atomically, backing up the file it replaces.

    The data is rendered before anything on disk is touched, so data that
    cannot be serialized leaves both the file and its backups alone.

    Args:
        file_path: Destination file
        data: JSON-serializable data
        create_backup_first: Back up an existing file before replacing it
        backup_dir: Where backups go (defaults to a backups/ dir beside the file)
        indent: JSON indentation
        keep_backups: How many backups of this file to keep

    Returns:
        Path of the backup that was made, or None

    Raises:
        ValueError: If data cannot be serialized to JSON
        OSError: If the file cannot be written
    """
    file_path = Path(file_path)

    try:
        text = json.dumps(data, indent=indent, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as e:
        raise ValueError(f"Cannot serialize data to JSON: {e}") from e

    backup_path = None
    if create_backup_first and file_path.exists():
        backup_path = create_backup(file_path, backup_dir)
        cleanup_old_backups(
            backup_dir or default_backup_dir(file_path), file_path.stem, keep_backups
        )

    atomic_write_text(file_path, text)
    return backup_path
