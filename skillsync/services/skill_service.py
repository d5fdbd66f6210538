"""Skill service — discovers skills in per-agent config directories.

Folder skills live under an agent's dedicated skills directory (one
subdirectory per skill); single-file skills are matched by the agent's glob
patterns directly under its config directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from skillsync.errors import NotFoundError, SkillSyncError
from skillsync.schemas.agent import AgentConfig
from skillsync.schemas.skill import Agent, Skill, SkillFile, SkillFormat
from skillsync.utils.fs import file_times
from skillsync.utils.markdown import DESCRIPTION_MAX_CHARS, extract_description, parse_skill_frontmatter

logger = logging.getLogger(__name__)

PRIMARY_ENTRY_NAME = "skill.md"
ENTRY_NAMES = ("skill.md", "index.md", "README.md")


def scan_all_skills(configs: list[AgentConfig]) -> list[Skill]:
    """Scan every enabled descriptor. A failing descriptor is logged and skipped."""
    skills: list[Skill] = []
    for config in configs:
        if not config.enabled:
            continue
        try:
            skills.extend(scan_agent_skills(config))
        except (OSError, SkillSyncError) as exc:
            logger.warning("Failed to scan skills for %s: %s", config.agent, exc)
    logger.info("Scanned %d skills across %d agents", len(skills), sum(c.enabled for c in configs))
    return skills


def scan_agent_skills(config: AgentConfig) -> list[Skill]:
    skills: list[Skill] = []

    # Each subdirectory of the skills dir is a skill; loose files are ignored
    skills_dir = config.skills_dir
    if skills_dir is not None and skills_dir.is_dir():
        for child in skills_dir.iterdir():
            if not child.is_dir():
                continue
            try:
                skills.append(parse_skill_folder(child, config.agent))
            except OSError as exc:
                logger.warning("Skipping unreadable skill folder %s: %s", child, exc)

    # Bare config files (CLAUDE.md, .cursorrules, ...)
    config_dir = config.config_dir
    if config_dir.is_dir():
        seen: set[Path] = set()
        for pattern in config.file_patterns:
            if "skills/" in pattern:
                continue
            for match in config_dir.glob(pattern):
                if not match.is_file() or match in seen:
                    continue
                if skills_dir is not None and _is_within(match, skills_dir):
                    continue
                seen.add(match)
                skills.append(parse_single_file(match, config.agent))

    return skills


def parse_skill_folder(folder: Path, agent: Agent) -> Skill:
    """Build a folder skill: top-level files with entry detection, then nested files."""
    folder_name = folder.name
    candidates = {*ENTRY_NAMES, f"{folder_name}.md"}

    top_level: list[Path] = []
    nested: list[Path] = []
    entry: Path | None = None
    for child in folder.iterdir():
        if child.is_file():
            top_level.append(child)
            if child.name == PRIMARY_ENTRY_NAME:
                entry = child
            elif entry is None and child.name in candidates:
                entry = child
        elif child.is_dir():
            nested.extend(p for p in child.rglob("*") if p.is_file())

    files = [_skill_file(p, is_entry=(p == entry)) for p in top_level]
    files.extend(_skill_file(p, is_entry=False) for p in nested)
    files.sort(key=lambda f: (not f.is_entry, f.name))

    skill = Skill.new_folder(folder_name, str(folder), agent, files)
    if skill.entry_file:
        _apply_metadata(skill, Path(skill.entry_file))
    _apply_times(skill, folder)
    return skill


def parse_single_file(path: Path, agent: Agent) -> Skill:
    """Treat one bare configuration file as a one-file skill."""
    file = _skill_file(path, is_entry=True)
    name = path.name.split(".")[0] or path.name
    skill = Skill.new_single_file(name, file, agent)
    _apply_metadata(skill, path)
    _apply_times(skill, path)
    return skill


def get_skill_files(path: str) -> list[SkillFile]:
    """List the files of a skill path: every file under a folder, or the file itself."""
    target = Path(path)
    if not target.exists():
        raise NotFoundError(f"File not found: {path}")
    if target.is_file():
        return [_skill_file(target, is_entry=True)]
    return [_skill_file(p, is_entry=False) for p in target.rglob("*") if p.is_file()]


# ── Helpers ──────────────────────────────────────────────────────────


def _skill_file(path: Path, *, is_entry: bool) -> SkillFile:
    try:
        size = path.stat().st_size
    except OSError:
        size = 0
    return SkillFile(
        name=path.name,
        file_path=str(path),
        format=SkillFormat.from_extension(path.suffix),
        is_entry=is_entry,
        size=size,
    )


def _apply_metadata(skill: Skill, path: Path) -> None:
    """Fill description (and frontmatter version/author/tags when present)."""
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return

    meta, body = parse_skill_frontmatter(content)
    description = meta.get("description")
    if isinstance(description, str) and description.strip():
        skill.description = description.strip()[:DESCRIPTION_MAX_CHARS]
    else:
        skill.description = extract_description(body)

    if meta.get("version") is not None:
        skill.version = str(meta["version"])
    if isinstance(meta.get("author"), str):
        skill.author = meta["author"]
    if isinstance(meta.get("tags"), list):
        skill.tags = [str(t) for t in meta["tags"]]


def _apply_times(skill: Skill, path: Path) -> None:
    created, modified = file_times(path)
    if created is not None:
        skill.created_at = created
    if modified is not None:
        skill.updated_at = modified


def _is_within(path: Path, directory: Path) -> bool:
    try:
        return path.resolve().is_relative_to(directory.resolve())
    except OSError:
        return False
