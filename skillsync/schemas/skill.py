"""Skill data model — agents, formats, files and skills, plus request/response schemas."""

from __future__ import annotations

import time
import uuid
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class AgentKind(StrEnum):
    """Known assistant tools, plus the open ``custom`` variant."""

    CLAUDE = "claude"
    CURSOR = "cursor"
    CONTINUE_DEV = "continue_dev"
    AIDER = "aider"
    WINDSURF = "windsurf"
    CUSTOM = "custom"


_DOT_DIRS = {
    AgentKind.CLAUDE: ".claude",
    AgentKind.CURSOR: ".cursor",
    AgentKind.CONTINUE_DEV: ".continue",
    AgentKind.AIDER: ".aider",
    AgentKind.WINDSURF: ".codeium",
}

_INSTALL_EXTENSIONS = {
    AgentKind.CLAUDE: "md",
    AgentKind.CURSOR: "cursorrules",
    AgentKind.CONTINUE_DEV: "json",
    AgentKind.AIDER: "txt",
    AgentKind.WINDSURF: "yaml",
}

_AGENT_ALIASES = {
    "claude": AgentKind.CLAUDE,
    "cursor": AgentKind.CURSOR,
    "continue": AgentKind.CONTINUE_DEV,
    "continuedev": AgentKind.CONTINUE_DEV,
    "continue_dev": AgentKind.CONTINUE_DEV,
    "continue.dev": AgentKind.CONTINUE_DEV,
    "aider": AgentKind.AIDER,
    "windsurf": AgentKind.WINDSURF,
    "codeium": AgentKind.WINDSURF,
}


class Agent(BaseModel):
    """Target assistant tool. Equality is by kind + name."""

    model_config = ConfigDict(frozen=True)

    kind: AgentKind
    name: str | None = None  # only set for the custom variant

    @classmethod
    def custom(cls, name: str) -> Agent:
        return cls(kind=AgentKind.CUSTOM, name=name)

    @property
    def is_custom(self) -> bool:
        return self.kind is AgentKind.CUSTOM

    @property
    def slug(self) -> str:
        """Stable string key used in the ledger and in URLs."""
        if self.is_custom:
            return self.name or ""
        return self.kind.value

    @property
    def dot_dir(self) -> str:
        if self.is_custom:
            return f".{(self.name or '').lower()}"
        return _DOT_DIRS[self.kind]

    @property
    def skills_subdir(self) -> str:
        # Aider keeps its reusable prompts outside a skills/ folder
        if self.kind is AgentKind.AIDER:
            return "prompts"
        return "skills"

    @property
    def install_extension(self) -> str | None:
        """Extension used for installed remote skills; custom agents cannot install."""
        if self.is_custom:
            return None
        return _INSTALL_EXTENSIONS[self.kind]

    def __str__(self) -> str:
        return self.slug


def parse_agent(value: str) -> Agent:
    """Map a user-supplied agent name onto an Agent. Never fails."""
    kind = _AGENT_ALIASES.get(value.strip().lower())
    if kind is None:
        return Agent.custom(value.strip())
    return Agent(kind=kind)


class SkillFormat(StrEnum):
    MARKDOWN = "markdown"
    JSON = "json"
    YAML = "yaml"
    PYTHON = "python"
    PLAIN_TEXT = "plain_text"

    @classmethod
    def from_extension(cls, ext: str) -> SkillFormat:
        return _EXTENSION_FORMATS.get(ext.lower().lstrip("."), cls.PLAIN_TEXT)

    @property
    def extension(self) -> str:
        return _FORMAT_EXTENSIONS[self]


_EXTENSION_FORMATS = {
    "md": SkillFormat.MARKDOWN,
    "markdown": SkillFormat.MARKDOWN,
    "json": SkillFormat.JSON,
    "yaml": SkillFormat.YAML,
    "yml": SkillFormat.YAML,
    "py": SkillFormat.PYTHON,
}

_FORMAT_EXTENSIONS = {
    SkillFormat.MARKDOWN: "md",
    SkillFormat.JSON: "json",
    SkillFormat.YAML: "yaml",
    SkillFormat.PYTHON: "py",
    SkillFormat.PLAIN_TEXT: "txt",
}

_FORMAT_ALIASES = {
    "markdown": SkillFormat.MARKDOWN,
    "md": SkillFormat.MARKDOWN,
    "json": SkillFormat.JSON,
    "yaml": SkillFormat.YAML,
    "yml": SkillFormat.YAML,
    "python": SkillFormat.PYTHON,
    "py": SkillFormat.PYTHON,
    "text": SkillFormat.PLAIN_TEXT,
    "txt": SkillFormat.PLAIN_TEXT,
    "plaintext": SkillFormat.PLAIN_TEXT,
    "plain_text": SkillFormat.PLAIN_TEXT,
}


def parse_format(value: str) -> SkillFormat:
    """Map a user-supplied format name onto a SkillFormat; unknown names are plain text."""
    return _FORMAT_ALIASES.get(value.strip().lower(), SkillFormat.PLAIN_TEXT)


# ── Core model ───────────────────────────────────────────────────────


class SkillFile(BaseModel):
    name: str
    file_path: str
    format: SkillFormat
    is_entry: bool = False
    size: int = 0


def _now() -> int:
    return int(time.time())


class Skill(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: str | None = None
    folder_path: str
    agent: Agent
    files: list[SkillFile] = Field(default_factory=list)
    entry_file: str | None = None
    tags: list[str] = Field(default_factory=list)
    version: str | None = None
    author: str | None = None
    is_local: bool = True
    is_folder: bool = True
    file_count: int = 0
    created_at: int = Field(default_factory=_now)
    updated_at: int = Field(default_factory=_now)

    @classmethod
    def new_folder(cls, name: str, folder_path: str, agent: Agent, files: list[SkillFile]) -> Skill:
        entry = next((f.file_path for f in files if f.is_entry), None)
        return cls(
            name=name,
            folder_path=folder_path,
            agent=agent,
            files=files,
            entry_file=entry,
            is_folder=True,
            file_count=len(files),
        )

    @classmethod
    def new_single_file(cls, name: str, file: SkillFile, agent: Agent) -> Skill:
        return cls(
            name=name,
            folder_path=file.file_path,
            agent=agent,
            files=[file],
            entry_file=file.file_path,
            is_folder=False,
            file_count=1,
        )


# ── Requests / responses ─────────────────────────────────────────────


class SkillCreate(BaseModel):
    name: str = Field(..., max_length=128)
    agent: str = "claude"
    format: str = "markdown"
    description: str | None = None
    tags: list[str] = []
    content: str | None = None  # None = agent/format default template


class SkillFileCreate(BaseModel):
    skill_folder: str
    file_name: str
    format: str = "markdown"
    content: str | None = None


class ContentUpdate(BaseModel):
    file_path: str
    content: str
    create_backup: bool = True


class SkillCopy(BaseModel):
    """Duplicate or rename a skill next to its current location."""
    path: str
    new_name: str


class PathResult(BaseModel):
    path: str


class ExportData(BaseModel):
    filename: str
    content: str
