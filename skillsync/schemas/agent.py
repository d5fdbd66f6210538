"""Per-agent scan descriptors."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from skillsync.schemas.skill import Agent, AgentKind


class AgentConfig(BaseModel):
    agent: Agent
    name: str
    config_dir: Path
    skills_dir: Path | None = None
    file_patterns: list[str] = []
    enabled: bool = True


class AgentConfigUpdate(BaseModel):
    enabled: bool


def default_agent_configs(home: Path) -> list[AgentConfig]:
    """Descriptors for the supported agents. Only Claude is scanned by default."""
    return [
        AgentConfig(
            agent=Agent(kind=AgentKind.CLAUDE),
            name="Claude Code",
            config_dir=home / ".claude",
            skills_dir=home / ".claude" / "skills",
            file_patterns=["*.md", "CLAUDE.md", "rules/*.md"],
            enabled=True,
        ),
        AgentConfig(
            agent=Agent(kind=AgentKind.CURSOR),
            name="Cursor",
            config_dir=home / ".cursor",
            file_patterns=[".cursorrules", "*.cursorrules"],
            enabled=False,
        ),
        AgentConfig(
            agent=Agent(kind=AgentKind.CONTINUE_DEV),
            name="Continue.dev",
            config_dir=home / ".continue",
            file_patterns=["config.json", "profiles/*.json"],
            enabled=False,
        ),
        AgentConfig(
            agent=Agent(kind=AgentKind.AIDER),
            name="Aider",
            config_dir=home / ".aider",
            file_patterns=[".aider.conf.yml", "*.txt"],
            enabled=False,
        ),
        AgentConfig(
            agent=Agent(kind=AgentKind.WINDSURF),
            name="Windsurf/Codeium",
            config_dir=home / ".codeium",
            file_patterns=["*.yaml", "*.json"],
            enabled=False,
        ),
    ]
