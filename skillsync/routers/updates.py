"""Update endpoints — check, apply, skip and roll back installed skills."""

from fastapi import APIRouter

from skillsync.schemas.registry import InstalledSkill
from skillsync.schemas.update import (
    RollbackRequest,
    SkillUpdate,
    SkippedVersion,
    SkipRequest,
    UpdateApplyResult,
    UpdateCheckResult,
)
from skillsync.services import update_service

router = APIRouter()


@router.get("/check", response_model=UpdateCheckResult)
async def check_updates():
    return await update_service.check_all_updates()


@router.post("/apply", response_model=InstalledSkill)
async def apply_update(update: SkillUpdate):
    return await update_service.apply_update(update)


@router.post("/apply-all", response_model=list[UpdateApplyResult])
async def apply_all_updates(updates: list[SkillUpdate]):
    return await update_service.apply_all_updates(updates)


@router.post("/rollback")
async def rollback_skill(data: RollbackRequest):
    restored_from = update_service.rollback_skill(data.skill_id, data.agent)
    return {"restored_from": restored_from}


@router.get("/skipped", response_model=list[SkippedVersion])
async def list_skipped():
    return update_service.list_skipped_versions()


@router.post("/skip", response_model=SkippedVersion)
async def skip_version(data: SkipRequest):
    return update_service.skip_version(data.skill_id, data.version)
