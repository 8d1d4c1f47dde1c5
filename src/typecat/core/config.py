"""Configuration settings for Typecat.

Resolution order: CLI options > environment (``TYPECAT_*``) > ``.env`` > defaults.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TYPECAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Workspace cache root (one subdirectory per identity)
    cache_dir: Path = Field(default=Path(".typecat/accessors"))

    # Logical name the root project accessor is resolved under
    projects_extension_name: str = "projects"

    # Generate project accessors at all
    project_accessors: bool = True

    # Worker threads for independent generation requests
    concurrency: int = Field(default=1, ge=1)

    @property
    def logs_dir(self) -> Path:
        """Directory for JSONL run logs."""
        return self.cache_dir / "logs"

    def ensure_cache_dir(self) -> None:
        """Create the cache directory if it doesn't exist."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings cache (useful for testing)."""
    global _settings
    _settings = None


class _SettingsProxy:
    """Lazy proxy for settings that loads on first access."""

    def __getattr__(self, name: str) -> object:
        return getattr(get_settings(), name)


settings: Settings = _SettingsProxy()  # type: ignore[assignment]
