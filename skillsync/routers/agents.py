"""Agent descriptor endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from skillsync.deps import get_agent_configs
from skillsync.schemas.agent import AgentConfig, AgentConfigUpdate
from skillsync.schemas.skill import parse_agent

router = APIRouter()


@router.get("/", response_model=list[AgentConfig])
async def list_agents(configs: list[AgentConfig] = Depends(get_agent_configs)):
    return configs


@router.patch("/{agent}", response_model=AgentConfig)
async def update_agent(
    agent: str,
    data: AgentConfigUpdate,
    configs: list[AgentConfig] = Depends(get_agent_configs),
):
    target = parse_agent(agent)
    for config in configs:
        if config.agent == target:
            config.enabled = data.enabled
            return config
    raise HTTPException(status_code=404, detail="Agent not found")
