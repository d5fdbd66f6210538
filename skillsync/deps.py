"""FastAPI dependency providers exposing shared state from the application."""

from fastapi import Request

from skillsync.catalog import SkillCatalog
from skillsync.schemas.agent import AgentConfig


def get_catalog(request: Request) -> SkillCatalog:
    return request.app.state.catalog


def get_agent_configs(request: Request) -> list[AgentConfig]:
    return request.app.state.agent_configs
