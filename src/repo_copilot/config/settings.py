"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-level settings loaded from ``REPO_COPILOT_*`` environment variables.

    These decide where the manifest lives and how loud the CLI is. The
    manifest's own settings document (base directory, identity, hosts)
    is a separate, persisted ``ManifestConfig``.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPO_COPILOT_",
        case_sensitive=False,
    )

    # Directory holding config.yaml and repositories.yaml
    config_dir: str = "~/.repo-copilot"

    log_level: str = "WARNING"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.config_dir = str(Path(self.config_dir).expanduser())

    @property
    def config_path(self) -> Path:
        return Path(self.config_dir)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
