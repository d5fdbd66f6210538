"""Backup vault endpoints."""

from fastapi import APIRouter, Query

from skillsync.schemas.backup import BackupInfo, CleanupResult, RestoreRequest
from skillsync.services import backup_service

router = APIRouter()


@router.get("/", response_model=list[BackupInfo])
async def list_backups(name: str = Query(..., min_length=1)):
    return backup_service.list_backups(name)


@router.post("/restore", status_code=204)
async def restore_backup(data: RestoreRequest):
    backup_service.restore_file(data.backup_path, data.dest_path)


@router.post("/cleanup", response_model=CleanupResult)
async def cleanup_backups():
    return CleanupResult(removed=backup_service.cleanup_old_backups())
