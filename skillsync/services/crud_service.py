"""Content store — create/read/update/delete/duplicate/rename skill files and folders.

Every destructive operation snapshots its target into the backup vault first;
if the snapshot fails, the operation does not proceed.
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from skillsync.config import settings
from skillsync.errors import AlreadyExistsError, InvalidPathError, NotFoundError, StorageIOError
from skillsync.schemas.skill import Agent, ExportData, Skill, SkillFile, SkillFormat
from skillsync.services import backup_service
from skillsync.services.template_service import get_template
from skillsync.utils.fs import atomic_write, copy_tree, ensure_dir, remove_path

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")

DEFAULT_SKILL_VERSION = "1.0.0"


def sanitize_filename(name: str) -> str:
    """Replace everything outside ``[A-Za-z0-9_-]`` with ``-`` and lower-case."""
    return _UNSAFE_CHARS.sub("-", name).lower()


def sanitize_file_name(name: str) -> str:
    """Like :func:`sanitize_filename`, but keeps a trailing ``.ext`` intact."""
    stem, dot, ext = name.rpartition(".")
    if dot and stem and ext:
        return f"{sanitize_filename(stem)}.{sanitize_filename(ext)}"
    return sanitize_filename(name)


def validate_content(content: str) -> None:
    if len(content.encode("utf-8")) > settings.max_content_bytes:
        raise InvalidPathError(f"Content too large (max {settings.max_content_bytes} bytes)")
    if "\x00" in content:
        raise InvalidPathError("Binary content not allowed")


def agent_skills_dir(agent: Agent) -> Path:
    if agent.is_custom and not agent.name:
        raise InvalidPathError("Agent name is required")
    return settings.home_dir / agent.dot_dir / agent.skills_subdir


# ── Skills ───────────────────────────────────────────────────────────


def create_skill(
    name: str,
    agent: Agent,
    fmt: SkillFormat,
    *,
    description: str | None = None,
    tags: list[str] | None = None,
    content: str | None = None,
) -> Skill:
    """Create ``<skills-dir>/<sanitized-name>/skill.<ext>`` and return its skill record."""
    if len(name.strip()) < 2:
        raise InvalidPathError("Skill name must be at least 2 characters")

    skill_folder = agent_skills_dir(agent) / sanitize_filename(name.strip())
    if skill_folder.exists():
        raise InvalidPathError(f"Skill '{name}' already exists")

    body = content if content is not None else get_template(agent, fmt, name=name)
    validate_content(body)

    ensure_dir(skill_folder)
    entry = skill_folder / f"skill.{fmt.extension}"
    try:
        atomic_write(entry, body)
    except StorageIOError:
        # An empty folder would block every later create with this name
        shutil.rmtree(skill_folder, ignore_errors=True)
        raise
    logger.info("Created skill %s for %s at %s", name, agent, skill_folder)

    file = SkillFile(
        name=entry.name,
        file_path=str(entry),
        format=fmt,
        is_entry=True,
        size=len(body.encode("utf-8")),
    )
    return Skill(
        name=name,
        description=description,
        folder_path=str(skill_folder),
        agent=agent,
        files=[file],
        entry_file=file.file_path,
        tags=tags or [],
        version=DEFAULT_SKILL_VERSION,
        is_local=True,
        is_folder=True,
        file_count=1,
    )


def delete_skill(path: str) -> None:
    """Back up, then remove a skill folder (or single-file skill)."""
    target = Path(path)
    if not target.exists():
        raise NotFoundError(f"Skill not found: {path}")

    backup_service.backup_folder(path)
    remove_path(target)
    logger.info("Deleted skill %s", target)


def duplicate_skill(source_path: str, new_name: str) -> str:
    """Recursive copy next to the source. Returns the new path."""
    source = Path(source_path)
    dest = _sibling_destination(source, new_name)

    if source.is_dir():
        copy_tree(source, dest)
    else:
        try:
            shutil.copy(source, dest)
        except OSError as exc:
            raise StorageIOError(f"Cannot copy {source} to {dest}: {exc}") from exc
    logger.info("Duplicated %s → %s", source, dest)
    return str(dest)


def rename_skill(path: str, new_name: str) -> str:
    """Move a skill next to itself under a new name. Returns the new path."""
    source = Path(path)
    dest = _sibling_destination(source, new_name)
    try:
        source.rename(dest)
    except OSError as exc:
        raise StorageIOError(f"Cannot rename {source} to {dest}: {exc}") from exc
    logger.info("Renamed %s → %s", source, dest)
    return str(dest)


# ── Files ────────────────────────────────────────────────────────────


def create_file(skill_folder: str, file_name: str, fmt: SkillFormat, content: str | None = None) -> SkillFile:
    folder = Path(skill_folder)
    if not folder.is_dir():
        raise NotFoundError(f"Skill folder not found: {skill_folder}")

    name = sanitize_file_name(file_name.strip())
    if not name.strip("-"):
        raise InvalidPathError(f"Invalid file name: {file_name!r}")
    if "." not in name:
        name = f"{name}.{fmt.extension}"

    file_path = folder / name
    if file_path.exists():
        raise AlreadyExistsError(f"File '{name}' already exists")

    body = content or ""
    validate_content(body)
    atomic_write(file_path, body)

    return SkillFile(
        name=name,
        file_path=str(file_path),
        format=fmt,
        is_entry=False,
        size=len(body.encode("utf-8")),
    )


def read_content(file_path: str) -> str:
    path = Path(file_path)
    if not path.is_file():
        raise NotFoundError(f"File not found: {file_path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidPathError(f"{file_path} is not editable text") from exc
    except OSError as exc:
        raise StorageIOError(f"Cannot read {file_path}: {exc}") from exc


def update_content(file_path: str, content: str, create_backup: bool = True) -> None:
    """Validate, optionally back up the previous version, then write atomically."""
    validate_content(content)

    path = Path(file_path)
    if create_backup and path.exists():
        backup_service.backup_file(file_path)

    atomic_write(path, content)
    logger.info("Updated %s (%d bytes)", path, len(content))


def delete_file(file_path: str) -> None:
    path = Path(file_path)
    if not path.exists():
        raise NotFoundError(f"File not found: {file_path}")

    backup_service.backup_file(file_path)
    remove_path(path)
    logger.info("Deleted file %s", path)


def export_skill(file_path: str) -> ExportData:
    """Raw content plus a basename for an external save dialog."""
    content = read_content(file_path)
    return ExportData(filename=Path(file_path).name or "skill.md", content=content)


def _sibling_destination(source: Path, new_name: str) -> Path:
    if not source.exists():
        raise NotFoundError(f"Not found: {source}")

    if source.is_dir():
        name = sanitize_filename(new_name.strip())
    else:
        name = sanitize_file_name(new_name.strip())
        if "." not in name:
            name += source.suffix
    if not name.strip("-."):
        raise InvalidPathError(f"Invalid name: {new_name!r}")

    dest = source.parent / name
    if dest.exists():
        raise AlreadyExistsError(f"'{new_name}' already exists")
    return dest
