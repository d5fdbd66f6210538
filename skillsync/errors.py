"""Error kinds raised by the skill services.

Every failure carries a kind tag and a plain message; nothing else.
"""

from __future__ import annotations


class SkillSyncError(Exception):
    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(SkillSyncError):
    """Referenced path or ledger row is absent."""

    kind = "not_found"


class AlreadyExistsError(SkillSyncError):
    """Destination collision."""

    kind = "already_exists"


class InvalidPathError(SkillSyncError):
    """Name validation, sanitization collision or content policy violation."""

    kind = "invalid_path"


class StorageIOError(SkillSyncError):
    """Filesystem or network failure."""

    kind = "io_error"


class ParseError(SkillSyncError):
    """Manifest or ledger could not be deserialized."""

    kind = "parse_error"
