"""
Shared pytest fixtures.

Every test runs against a throwaway home directory: agent dot-directories,
the backup vault, the registry cache and the ledger all live under tmp_path,
so nothing touches the real ~/.claude or ~/.skillsync.
"""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from skillsync.catalog import SkillCatalog
from skillsync.config import settings
from skillsync.deps import get_agent_configs, get_catalog
from skillsync.main import app
from skillsync.schemas.agent import AgentConfig, default_agent_configs


@pytest.fixture(autouse=True)
def sandbox(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home and data directories at tmp_path; returns the fake home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(settings, "home_dir", home)
    monkeypatch.setattr(settings, "data_dir", home / ".skillsync")
    return home


@pytest.fixture
def claude_skills(sandbox: Path) -> Path:
    skills_dir = sandbox / ".claude" / "skills"
    skills_dir.mkdir(parents=True)
    return skills_dir


@pytest.fixture
def catalog() -> SkillCatalog:
    return SkillCatalog()


@pytest.fixture
def agent_configs(sandbox: Path) -> list[AgentConfig]:
    return default_agent_configs(sandbox)


# ── HTTP test client ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def client(catalog: SkillCatalog, agent_configs: list[AgentConfig]) -> AsyncClient:
    # ASGITransport does not run the lifespan, so shared state comes from overrides
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_agent_configs] = lambda: agent_configs

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.pop(get_catalog, None)
    app.dependency_overrides.pop(get_agent_configs, None)
