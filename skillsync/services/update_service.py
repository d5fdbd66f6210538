"""Update service — compare installed skills with their registries, apply, skip and roll back."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from skillsync.errors import NotFoundError, SkillSyncError
from skillsync.schemas.registry import InstalledSkill, RegistryConfig
from skillsync.schemas.update import (
    SkillUpdate,
    SkippedVersion,
    UpdateApplyResult,
    UpdateCheckResult,
)
from skillsync.services import backup_service, ledger_service, registry_service
from skillsync.utils.versions import is_major_update, is_newer

logger = logging.getLogger(__name__)


async def check_all_updates() -> UpdateCheckResult:
    """Fetch each source registry once and propose numerically newer, non-skipped versions.

    A registry that cannot be fetched contributes nothing; only a ledger that
    cannot be read fails the whole check (reported in ``error``).
    """
    try:
        installed = ledger_service.load_installed()
    except SkillSyncError as exc:
        return UpdateCheckResult(last_checked=int(time.time()), error=str(exc))

    skipped = ledger_service.load_skipped()

    by_registry: dict[str, list[InstalledSkill]] = {}
    for row in installed:
        by_registry.setdefault(row.registry_url, []).append(row)

    updates: list[SkillUpdate] = []
    for registry_url, rows in by_registry.items():
        try:
            registry = await registry_service.fetch_registry(RegistryConfig(url=registry_url))
        except SkillSyncError as exc:
            logger.warning("Skipping update check for %s: %s", registry_url, exc)
            continue

        for row in rows:
            remote = registry.find(row.skill_id)
            if remote is None:
                continue
            if ledger_service.is_skipped(skipped, row.skill_id, remote.version):
                continue
            if not is_newer(row.version, remote.version):
                continue
            updates.append(
                SkillUpdate(
                    skill_id=row.skill_id,
                    skill_name=remote.name,
                    current_version=row.version,
                    new_version=remote.version,
                    agent=row.agent,
                    registry_url=registry_url,
                    is_major=is_major_update(row.version, remote.version),
                )
            )

    if updates:
        logger.info("%d skill updates available", len(updates))
    return UpdateCheckResult(available_updates=updates, last_checked=int(time.time()))


async def apply_update(update: SkillUpdate) -> InstalledSkill:
    """Re-fetch the registry and reinstall the skill over the installed copy."""
    registry = await registry_service.fetch_registry(RegistryConfig(url=update.registry_url))
    remote = registry.find(update.skill_id)
    if remote is None:
        raise NotFoundError(f"Skill {update.skill_id} not found in {update.registry_url}")
    return await registry_service.install_skill(remote, update.registry_url, update.agent)


async def apply_all_updates(updates: list[SkillUpdate]) -> list[UpdateApplyResult]:
    """Apply each update independently; one failure never stops the rest."""
    results: list[UpdateApplyResult] = []
    for update in updates:
        try:
            await apply_update(update)
        except SkillSyncError as exc:
            logger.warning("Update of %s for %s failed: %s", update.skill_id, update.agent, exc)
            results.append(
                UpdateApplyResult(skill_id=update.skill_id, agent=update.agent, success=False, error=str(exc))
            )
        else:
            results.append(UpdateApplyResult(skill_id=update.skill_id, agent=update.agent, success=True))
    return results


def rollback_skill(skill_id: str, agent: str) -> str:
    """Restore the most recent snapshot of an installed skill's file. Returns the snapshot used."""
    row = ledger_service.find_installation(skill_id, agent)
    if row is None:
        raise NotFoundError(f"Skill {skill_id} not installed")

    backups = backup_service.list_backups(Path(row.installed_path).name)
    if not backups:
        raise NotFoundError("No backup available")

    latest = backups[0]
    backup_service.restore_file(latest.path, row.installed_path)
    logger.info("Rolled back %s for %s from %s", skill_id, agent, latest.name)
    return latest.path


def skip_version(skill_id: str, version: str) -> SkippedVersion:
    return ledger_service.add_skipped(skill_id, version)


def list_skipped_versions() -> list[SkippedVersion]:
    return ledger_service.load_skipped()
