"""Manifest models: the settings document and the repository list."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repo_copilot.core.models.repository import HostConfig, Repository


def _default_base_dir() -> str:
    return str(Path.home() / "workspace")


class DisplayFormat(str, Enum):
    """Output formats for repository listings."""

    TABLE = "table"
    YAML = "yaml"
    JSON = "json"


class ManifestConfig(BaseModel):
    """The settings document persisted as ``config.yaml``."""

    model_config = ConfigDict(populate_by_name=True)

    base_dir: str = Field(default_factory=_default_base_dir, alias="baseDir")
    format: DisplayFormat = DisplayFormat.TABLE
    username: str = ""
    email: str = ""
    hosts: dict[str, HostConfig] = Field(default_factory=dict)

    @field_validator("base_dir")
    @classmethod
    def _expand_base_dir(cls, value: str) -> str:
        return str(Path(value).expanduser())

    def identity_for(self, host: str) -> tuple[str, str]:
        """Git (username, email) for a host, host overrides first."""
        override = self.hosts.get(host)
        username = (override.username if override else None) or self.username
        email = (override.email if override else None) or self.email
        return username, email


class Manifest(BaseModel):
    """Both persisted documents, loaded together."""

    config: ManifestConfig = Field(default_factory=ManifestConfig)
    repositories: list[Repository] = Field(default_factory=list)

    def find_by_url(self, url: str) -> Repository | None:
        return next((r for r in self.repositories if r.url == url), None)

    def find_by_name(self, name: str) -> list[Repository]:
        return [r for r in self.repositories if r.name == name]
