"""SkillSync configuration — loaded from environment / .env file."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="SKILLSYNC_", extra="ignore")

    env: str = "development"

    # Root for per-agent dot directories (~/.claude, ~/.cursor, ...)
    home_dir: Path = Path.home()
    # Ledger, skipped versions, backup vault and registry cache live here
    data_dir: Path = Path.home() / ".skillsync"

    # Registry cache freshness window
    cache_ttl_seconds: int = 3600
    manifest_filename: str = "registry.json"
    default_branch: str = "main"

    # Backup vault
    backup_retention_days: int = 7
    cleanup_backups_on_startup: bool = True

    # Editable content policy
    max_content_bytes: int = 1_000_000

    # HTTP
    http_timeout: float = 30.0
    user_agent: str = "SkillSync/0.1"

    @property
    def backup_dir(self) -> Path:
        return self.data_dir / "backups"

    @property
    def registry_cache_dir(self) -> Path:
        return self.data_dir / "cache" / "registries"

    @property
    def ledger_file(self) -> Path:
        return self.data_dir / "installed-skills.json"

    @property
    def skipped_versions_file(self) -> Path:
        return self.data_dir / "skipped-versions.json"


settings = Settings()
