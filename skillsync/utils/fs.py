"""Filesystem helpers shared by the content store, backup vault and registry cache."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

from skillsync.errors import NotFoundError, StorageIOError


def atomic_write(path: Path, data: str | bytes) -> None:
    """Write to a sibling temp file, then rename over ``path``.

    Readers see either the old file or the complete new one, never a partial write.
    """
    payload = data.encode("utf-8") if isinstance(data, str) else data
    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as exc:
        raise StorageIOError(f"Cannot write {path}: {exc}") from exc

    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(payload)
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise StorageIOError(f"Cannot write {path}: {exc}") from exc


def copy_tree(src: Path, dst: Path) -> None:
    """Recursive copy of ``src`` into ``dst`` (created as needed)."""
    try:
        shutil.copytree(src, dst, copy_function=shutil.copy, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        raise StorageIOError(f"Cannot copy {src} to {dst}: {exc}") from exc


def remove_path(path: Path) -> None:
    """Remove a file or a whole directory tree."""
    if not path.exists():
        raise NotFoundError(f"Not found: {path}")
    try:
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as exc:
        raise StorageIOError(f"Cannot remove {path}: {exc}") from exc


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageIOError(f"Cannot create directory {path}: {exc}") from exc


def path_size(path: Path) -> int:
    """Byte size of a file, or the summed size of every file under a directory."""
    if path.is_file():
        return path.stat().st_size
    return sum(p.stat().st_size for p in path.rglob("*") if p.is_file())


def file_times(path: Path) -> tuple[int | None, int | None]:
    """(created, modified) as unix seconds; None where the platform cannot tell."""
    try:
        st = path.stat()
    except OSError:
        return None, None
    created = getattr(st, "st_birthtime", None)
    return (int(created) if created is not None else None), int(st.st_mtime)
