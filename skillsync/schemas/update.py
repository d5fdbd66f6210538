"""Update engine schemas."""

from pydantic import BaseModel


class SkillUpdate(BaseModel):
    skill_id: str
    skill_name: str = ""
    current_version: str
    new_version: str
    agent: str
    registry_url: str
    changelog: str | None = None
    is_major: bool = False


class UpdateCheckResult(BaseModel):
    available_updates: list[SkillUpdate] = []
    last_checked: int
    error: str | None = None  # only set when the ledger itself cannot be read


class UpdateApplyResult(BaseModel):
    skill_id: str
    agent: str
    success: bool
    error: str | None = None


class SkippedVersion(BaseModel):
    skill_id: str
    version: str
    skipped_at: int


class SkipRequest(BaseModel):
    skill_id: str
    version: str


class RollbackRequest(BaseModel):
    skill_id: str
    agent: str
