"""Local skill endpoints — scan, browse and edit skills on disk."""

from fastapi import APIRouter, Depends, HTTPException, Query

from skillsync.catalog import SkillCatalog
from skillsync.deps import get_agent_configs, get_catalog
from skillsync.schemas.agent import AgentConfig
from skillsync.schemas.skill import (
    ContentUpdate,
    ExportData,
    PathResult,
    Skill,
    SkillCopy,
    SkillCreate,
    SkillFile,
    SkillFileCreate,
    parse_agent,
    parse_format,
)
from skillsync.services import crud_service, skill_service

router = APIRouter()


@router.post("/scan", response_model=list[Skill])
async def scan_skills(
    catalog: SkillCatalog = Depends(get_catalog),
    configs: list[AgentConfig] = Depends(get_agent_configs),
):
    """Rescan every enabled agent and replace the catalog."""
    skills = skill_service.scan_all_skills(configs)
    catalog.replace(skills)
    return skills


@router.get("/", response_model=list[Skill])
async def list_skills(agent: str | None = None, catalog: SkillCatalog = Depends(get_catalog)):
    if agent is not None:
        return catalog.by_agent(parse_agent(agent))
    return catalog.all()


@router.get("/files", response_model=list[SkillFile])
async def list_skill_files(path: str = Query(...)):
    return skill_service.get_skill_files(path)


@router.get("/content")
async def read_content(path: str = Query(...)):
    return {"path": path, "content": crud_service.read_content(path)}


@router.put("/content", status_code=204)
async def update_content(data: ContentUpdate):
    crud_service.update_content(data.file_path, data.content, create_backup=data.create_backup)


@router.get("/export", response_model=ExportData)
async def export_skill(path: str = Query(...)):
    return crud_service.export_skill(path)


@router.post("/", response_model=Skill, status_code=201)
async def create_skill(data: SkillCreate, catalog: SkillCatalog = Depends(get_catalog)):
    skill = crud_service.create_skill(
        data.name,
        parse_agent(data.agent),
        parse_format(data.format),
        description=data.description,
        tags=data.tags,
        content=data.content,
    )
    catalog.add(skill)
    return skill


@router.post("/files", response_model=SkillFile, status_code=201)
async def create_skill_file(data: SkillFileCreate):
    return crud_service.create_file(data.skill_folder, data.file_name, parse_format(data.format), data.content)


@router.delete("/", status_code=204)
async def delete_skill(path: str = Query(...)):
    crud_service.delete_skill(path)


@router.delete("/files", status_code=204)
async def delete_skill_file(path: str = Query(...)):
    crud_service.delete_file(path)


@router.post("/duplicate", response_model=PathResult, status_code=201)
async def duplicate_skill(data: SkillCopy):
    return PathResult(path=crud_service.duplicate_skill(data.path, data.new_name))


@router.post("/rename", response_model=PathResult)
async def rename_skill(data: SkillCopy):
    return PathResult(path=crud_service.rename_skill(data.path, data.new_name))


@router.get("/{skill_id}", response_model=Skill)
async def get_skill(skill_id: str, catalog: SkillCatalog = Depends(get_catalog)):
    skill = catalog.get(skill_id)
    if not skill:
        raise HTTPException(status_code=404, detail="Skill not found")
    return skill
