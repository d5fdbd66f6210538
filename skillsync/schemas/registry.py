"""Remote registry manifest and installed-skill ledger schemas."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from skillsync.schemas.skill import Agent, AgentKind


class SkillFiles(BaseModel):
    """Per-agent file reference (relative to the registry, or absolute URL)."""

    model_config = ConfigDict(populate_by_name=True)

    claude: str | None = None
    cursor: str | None = None
    continue_: str | None = Field(
        default=None,
        validation_alias=AliasChoices("continue_dev", "continue"),
        serialization_alias="continue_dev",
    )
    aider: str | None = None
    windsurf: str | None = None

    def for_agent(self, agent: Agent) -> str | None:
        if agent.is_custom:
            return None
        return {
            AgentKind.CLAUDE: self.claude,
            AgentKind.CURSOR: self.cursor,
            AgentKind.CONTINUE_DEV: self.continue_,
            AgentKind.AIDER: self.aider,
            AgentKind.WINDSURF: self.windsurf,
        }[agent.kind]


class RemoteSkill(BaseModel):
    id: str
    name: str
    description: str | None = None
    version: str
    author: str | None = None
    agents: list[str] = []
    tags: list[str] = []
    files: SkillFiles = Field(default_factory=SkillFiles)
    url: str | None = None
    checksum: str | None = None


class SkillRegistry(BaseModel):
    version: str
    name: str
    description: str | None = None
    url: str = ""
    skills: list[RemoteSkill] = []
    last_updated: int = 0

    def find(self, skill_id: str) -> RemoteSkill | None:
        return next((s for s in self.skills if s.id == skill_id), None)


class RegistryConfig(BaseModel):
    url: str
    name: str = ""
    enabled: bool = True
    auth_token: str | None = None


class InstalledSkill(BaseModel):
    """Ledger row. At most one per (skill_id, agent)."""

    skill_id: str
    registry_url: str
    version: str
    installed_path: str
    agent: str
    installed_at: int


class InstallRequest(BaseModel):
    skill: RemoteSkill
    registry_url: str
    agent: str
