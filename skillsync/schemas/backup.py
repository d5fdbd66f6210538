"""Backup vault schemas."""

from pydantic import BaseModel


class BackupInfo(BaseModel):
    path: str
    name: str  # stored name: <unix-timestamp>_<original>
    original_name: str
    size: int
    created_at: int


class RestoreRequest(BaseModel):
    backup_path: str
    dest_path: str


class CleanupResult(BaseModel):
    removed: int
