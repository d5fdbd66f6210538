"""Remote registry endpoints — fetch manifests, install and uninstall skills."""

from fastapi import APIRouter

from skillsync.schemas.registry import InstalledSkill, InstallRequest, RegistryConfig, SkillRegistry
from skillsync.schemas.update import SkillUpdate
from skillsync.services import registry_service

router = APIRouter()


@router.post("/fetch", response_model=SkillRegistry)
async def fetch_registry(config: RegistryConfig):
    return await registry_service.fetch_registry(config)


@router.get("/installed", response_model=list[InstalledSkill])
async def list_installed():
    return registry_service.get_installed_skills()


@router.post("/install", response_model=InstalledSkill, status_code=201)
async def install_skill(data: InstallRequest):
    return await registry_service.install_skill(data.skill, data.registry_url, data.agent)


@router.delete("/installed/{skill_id}", status_code=204)
async def uninstall_skill(skill_id: str, agent: str):
    await registry_service.uninstall_skill(skill_id, agent)


@router.post("/check", response_model=list[SkillUpdate])
async def check_registry_updates(config: RegistryConfig):
    registry = await registry_service.fetch_registry(config)
    return registry_service.check_updates(registry)
