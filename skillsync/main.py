"""FastAPI application entrypoint."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skillsync.catalog import SkillCatalog
from skillsync.config import settings
from skillsync.deps import get_catalog
from skillsync.errors import SkillSyncError
from skillsync.routers import agents, backups, registry, skills, updates
from skillsync.schemas.agent import default_agent_configs
from skillsync.services import backup_service

# ── Logging setup ────────────────────────────────────────────────────
_log_level = os.environ.get("SKILLSYNC_LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    "not_found": 404,
    "already_exists": 409,
    "invalid_path": 400,
    "io_error": 502,
    "parse_error": 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    app.state.agent_configs = default_agent_configs(settings.home_dir)
    app.state.catalog = SkillCatalog()

    if settings.cleanup_backups_on_startup:
        try:
            removed = backup_service.cleanup_old_backups()
            if removed:
                logger.info("Startup backup sweep removed %d snapshots", removed)
        except SkillSyncError as exc:
            logger.warning("Backup cleanup failed (non-fatal): %s", exc)

    yield


app = FastAPI(
    title="SkillSync",
    description="Discover, edit, back up and sync AI coding-assistant skills",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SkillSyncError)
async def skillsync_error_handler(request: Request, exc: SkillSyncError):
    status = _STATUS_BY_KIND.get(exc.kind, 500)
    if status >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": exc.message, "kind": exc.kind})


# Mount routers
app.include_router(agents.router, prefix="/api/agents", tags=["agents"])
app.include_router(skills.router, prefix="/api/skills", tags=["skills"])
app.include_router(backups.router, prefix="/api/backups", tags=["backups"])
app.include_router(registry.router, prefix="/api/registry", tags=["registry"])
app.include_router(updates.router, prefix="/api/updates", tags=["updates"])


@app.get("/health")
async def health(catalog: SkillCatalog = Depends(get_catalog)):
    return {
        "status": "ok",
        "service": "skillsync",
        "data_dir": str(settings.data_dir),
        "skills": len(catalog),
    }
