"""Backup vault — timestamped copy-before-mutate snapshots.

Snapshots are stored flat in ``settings.backup_dir`` as
``<unix-timestamp>[-<n>]_<original-name>``. There is no index file: lookup is a
directory listing plus a suffix match on the original name.
"""

from __future__ import annotations

import logging
import os
import shutil
import time
from pathlib import Path

from skillsync.config import settings
from skillsync.errors import NotFoundError, StorageIOError
from skillsync.schemas.backup import BackupInfo
from skillsync.utils.fs import copy_tree, ensure_dir, path_size

logger = logging.getLogger(__name__)


def backup_file(file_path: str) -> Path:
    """Snapshot a single file into the vault."""
    source = Path(file_path)
    if not source.exists():
        raise NotFoundError(f"File not found: {file_path}")

    dest = _snapshot_path(source)
    try:
        shutil.copy(source, dest)
    except OSError as exc:
        raise StorageIOError(f"Backup of {file_path} failed: {exc}") from exc

    logger.info("Backed up %s → %s", source, dest)
    return dest


def backup_folder(folder_path: str) -> Path:
    """Snapshot a whole folder (recursively) into the vault."""
    source = Path(folder_path)
    if not source.exists():
        raise NotFoundError(f"Folder not found: {folder_path}")
    if source.is_file():
        return backup_file(folder_path)

    dest = _snapshot_path(source)
    copy_tree(source, dest)
    # copytree carries over the source folder's mtime; the vault ages snapshots by it
    os.utime(dest, None)

    logger.info("Backed up folder %s → %s", source, dest)
    return dest


def restore_file(backup_path: str, dest_path: str) -> None:
    """Copy a snapshot (file or folder) back onto ``dest_path``."""
    backup = Path(backup_path)
    dest = Path(dest_path)
    if not backup.exists():
        raise NotFoundError(f"Backup not found: {backup_path}")

    ensure_dir(dest.parent)
    if backup.is_dir():
        copy_tree(backup, dest)
    else:
        try:
            shutil.copy(backup, dest)
        except OSError as exc:
            raise StorageIOError(f"Restore of {backup_path} failed: {exc}") from exc

    logger.info("Restored %s → %s", backup, dest)


def list_backups(original_name: str) -> list[BackupInfo]:
    """Every snapshot whose stored name ends with ``original_name``, newest first."""
    vault = settings.backup_dir
    if not vault.is_dir():
        return []

    found: list[tuple[float, BackupInfo]] = []
    for entry in vault.iterdir():
        if not entry.name.endswith(original_name):
            continue
        try:
            mtime = entry.stat().st_mtime
            size = path_size(entry)
        except OSError:
            continue
        _, _, stored_original = entry.name.partition("_")
        found.append(
            (
                mtime,
                BackupInfo(
                    path=str(entry),
                    name=entry.name,
                    original_name=stored_original or entry.name,
                    size=size,
                    created_at=int(mtime),
                ),
            )
        )

    found.sort(key=lambda item: (item[0], _sequence(item[1].name), item[1].name), reverse=True)
    return [info for _, info in found]


def cleanup_old_backups() -> int:
    """Remove snapshots older than the retention window. Returns the count removed."""
    vault = settings.backup_dir
    if not vault.is_dir():
        return 0

    cutoff = time.time() - settings.backup_retention_days * 24 * 60 * 60
    removed = 0
    for entry in vault.iterdir():
        try:
            if entry.stat().st_mtime >= cutoff:
                continue
            if entry.is_dir():
                shutil.rmtree(entry)
            else:
                entry.unlink()
            removed += 1
        except OSError as exc:
            logger.warning("Could not remove old backup %s: %s", entry, exc)

    if removed:
        logger.info("Removed %d backups older than %d days", removed, settings.backup_retention_days)
    return removed


def _snapshot_path(source: Path) -> Path:
    """A vault path for ``source`` that does not exist yet.

    Same-second snapshots of the same name get a ``-<n>`` counter after the
    timestamp, so names still end with ``_<original-name>``.
    """
    vault = settings.backup_dir
    ensure_dir(vault)
    stamp = int(time.time())
    dest = vault / f"{stamp}_{source.name}"
    seq = 0
    while dest.exists():
        seq += 1
        dest = vault / f"{stamp}-{seq}_{source.name}"
    return dest


def _sequence(stored_name: str) -> int:
    prefix, _, _ = stored_name.partition("_")
    _, _, seq = prefix.partition("-")
    return int(seq) if seq.isdigit() else 0
