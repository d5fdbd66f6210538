"""Registry service — fetch/cache remote manifests, install and uninstall remote skills."""

from __future__ import annotations

import hashlib
import json
import logging
import time
from pathlib import Path

import yaml
from pydantic import ValidationError

from skillsync.config import settings
from skillsync.errors import InvalidPathError, NotFoundError, ParseError, SkillSyncError
from skillsync.schemas.registry import InstalledSkill, RegistryConfig, RemoteSkill, SkillRegistry
from skillsync.schemas.skill import Agent, parse_agent
from skillsync.schemas.update import SkillUpdate
from skillsync.services import backup_service, download_service, ledger_service
from skillsync.utils.fs import atomic_write, ensure_dir, remove_path
from skillsync.utils.versions import is_major_update, is_newer

logger = logging.getLogger(__name__)


def url_to_filename(url: str) -> str:
    """Cache file name: first 16 hex chars of the URL's MD5."""
    digest = hashlib.md5(url.encode("utf-8"), usedforsecurity=False).hexdigest()
    return f"{digest[:16]}.json"


def parse_manifest(content: str) -> SkillRegistry:
    """Parse a manifest as JSON, falling back to YAML."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ParseError(f"Invalid registry format: {exc}") from exc

    try:
        return SkillRegistry.model_validate(data)
    except ValidationError as exc:
        raise ParseError(f"Invalid registry format: {exc}") from exc


async def fetch_registry(config: RegistryConfig) -> SkillRegistry:
    """Return the registry manifest, from cache when it is younger than the TTL."""
    cache_file = settings.registry_cache_dir / url_to_filename(config.url)
    cached = _read_cache(cache_file)
    now = int(time.time())
    if cached is not None and now - cached.last_updated < settings.cache_ttl_seconds:
        return cached

    manifest_url = download_service.validate_url(download_service.convert_github_repo_to_registry(config.url))
    if config.auth_token:
        content = await download_service.get_with_auth(manifest_url, config.auth_token)
    else:
        content = await download_service.fetch_text(manifest_url)

    registry = parse_manifest(content)
    registry.url = config.url
    registry.last_updated = int(time.time())

    try:
        _write_cache(cache_file, registry)
    except SkillSyncError as exc:
        logger.warning("Could not cache registry %s: %s", config.url, exc)

    logger.info("Fetched registry %s (%d skills)", config.url, len(registry.skills))
    return registry


def install_path(agent: Agent, skill_id: str) -> Path:
    """``<home>/<agent-dot-dir>/skills/<skill-id>/skill.<agent-ext>``."""
    ext = agent.install_extension
    if ext is None:
        raise InvalidPathError(f"Unknown agent: {agent}")
    if not skill_id or skill_id in (".", "..") or "/" in skill_id or "\\" in skill_id:
        raise InvalidPathError(f"Invalid skill id: {skill_id!r}")
    return settings.home_dir / agent.dot_dir / "skills" / skill_id / f"skill.{ext}"


async def install_skill(skill: RemoteSkill, registry_url: str, agent: str) -> InstalledSkill:
    """Download the agent's file for ``skill`` and record it in the ledger.

    An existing installed file is snapshotted before it is overwritten.
    """
    target = parse_agent(agent)
    reference = skill.files.for_agent(target)
    if not reference:
        raise InvalidPathError(f"Skill {skill.id} doesn't support {agent}")

    dest = install_path(target, skill.id)
    file_url = download_service.resolve_file_url(registry_url, reference)

    if dest.exists():
        backup_service.backup_file(str(dest))

    await download_service.download_file(file_url, dest)

    installed = InstalledSkill(
        skill_id=skill.id,
        registry_url=registry_url,
        version=skill.version,
        installed_path=str(dest),
        agent=target.slug,
        installed_at=int(time.time()),
    )
    ledger_service.record_installation(installed)
    logger.info("Installed %s %s for %s", skill.id, skill.version, target)
    return installed


async def uninstall_skill(skill_id: str, agent: str) -> None:
    row = ledger_service.find_installation(skill_id, agent)
    if row is None:
        raise NotFoundError(f"Skill {skill_id} not installed for {agent}")

    path = Path(row.installed_path)
    if path.exists():
        remove_path(path)
        parent = path.parent
        if parent.is_dir() and parent.name == skill_id and not any(parent.iterdir()):
            parent.rmdir()

    ledger_service.remove_installation(skill_id, agent)
    logger.info("Uninstalled %s for %s", skill_id, agent)


def get_installed_skills() -> list[InstalledSkill]:
    return ledger_service.load_installed()


def check_updates(registry: SkillRegistry) -> list[SkillUpdate]:
    """Ledger rows whose registry version is numerically newer than the installed one."""
    updates: list[SkillUpdate] = []
    for row in ledger_service.load_installed():
        remote = registry.find(row.skill_id)
        if remote is None or not is_newer(row.version, remote.version):
            continue
        updates.append(
            SkillUpdate(
                skill_id=row.skill_id,
                skill_name=remote.name,
                current_version=row.version,
                new_version=remote.version,
                agent=row.agent,
                registry_url=row.registry_url,
                is_major=is_major_update(row.version, remote.version),
            )
        )
    return updates


# ── Cache ────────────────────────────────────────────────────────────


def _read_cache(path: Path) -> SkillRegistry | None:
    if not path.exists():
        return None
    try:
        return SkillRegistry.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        logger.warning("Ignoring unreadable registry cache %s: %s", path, exc)
        return None


def _write_cache(path: Path, registry: SkillRegistry) -> None:
    ensure_dir(path.parent)
    atomic_write(path, registry.model_dump_json(by_alias=True, indent=2))
