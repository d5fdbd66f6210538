"""Installed-skills ledger and skipped-version markers.

Both are JSON arrays rewritten in full on every mutation (read everything,
change it in memory, write everything back). A missing file is an empty list.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from skillsync.config import settings
from skillsync.errors import NotFoundError, ParseError, StorageIOError
from skillsync.schemas.registry import InstalledSkill
from skillsync.schemas.skill import parse_agent
from skillsync.schemas.update import SkippedVersion
from skillsync.utils.fs import atomic_write, ensure_dir

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_installed_adapter = TypeAdapter(list[InstalledSkill])
_skipped_adapter = TypeAdapter(list[SkippedVersion])


def agent_key(agent: str) -> str:
    """Canonical ledger key for an agent name ("Continue" → "continue_dev")."""
    return parse_agent(agent).slug


# ── Installed skills ─────────────────────────────────────────────────


def load_installed() -> list[InstalledSkill]:
    return _load(settings.ledger_file, _installed_adapter)


def save_installed(rows: list[InstalledSkill]) -> None:
    _save(settings.ledger_file, rows)


def find_installation(skill_id: str, agent: str) -> InstalledSkill | None:
    key = agent_key(agent)
    return next((r for r in load_installed() if r.skill_id == skill_id and r.agent == key), None)


def record_installation(row: InstalledSkill) -> InstalledSkill:
    """Add ``row``, superseding any existing row for the same (skill_id, agent)."""
    rows = [r for r in load_installed() if not (r.skill_id == row.skill_id and r.agent == row.agent)]
    rows.append(row)
    save_installed(rows)
    return row


def remove_installation(skill_id: str, agent: str) -> InstalledSkill:
    key = agent_key(agent)
    rows = load_installed()
    match = next((r for r in rows if r.skill_id == skill_id and r.agent == key), None)
    if match is None:
        raise NotFoundError(f"Skill {skill_id} not installed for {agent}")
    save_installed([r for r in rows if r is not match])
    return match


# ── Skipped versions ─────────────────────────────────────────────────


def load_skipped() -> list[SkippedVersion]:
    """Skipped-version markers; an unreadable file counts as none skipped."""
    try:
        return _load(settings.skipped_versions_file, _skipped_adapter)
    except (ParseError, StorageIOError) as exc:
        logger.warning("Ignoring unreadable skipped-versions file: %s", exc)
        return []


def add_skipped(skill_id: str, version: str) -> SkippedVersion:
    """Idempotently mark (skill_id, version) as skipped."""
    skipped = load_skipped()
    for marker in skipped:
        if marker.skill_id == skill_id and marker.version == version:
            return marker

    marker = SkippedVersion(skill_id=skill_id, version=version, skipped_at=int(time.time()))
    skipped.append(marker)
    _save(settings.skipped_versions_file, skipped)
    logger.info("Skipping version %s of %s", version, skill_id)
    return marker


def is_skipped(skipped: list[SkippedVersion], skill_id: str, version: str) -> bool:
    return any(s.skill_id == skill_id and s.version == version for s in skipped)


# ── Helpers ──────────────────────────────────────────────────────────


def _load(path: Path, adapter: TypeAdapter[list[M]]) -> list[M]:
    if not path.exists():
        return []
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StorageIOError(f"Cannot read {path}: {exc}") from exc
    try:
        return adapter.validate_json(content)
    except ValidationError as exc:
        raise ParseError(f"Invalid {path.name}: {exc}") from exc


def _save(path: Path, rows: list[M]) -> None:
    ensure_dir(path.parent)
    payload = [r.model_dump(mode="json") for r in rows]
    atomic_write(path, json.dumps(payload, indent=2) + "\n")
