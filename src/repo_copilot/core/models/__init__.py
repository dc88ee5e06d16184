"""Domain models for repo-copilot."""

from repo_copilot.core.models.manifest import DisplayFormat, Manifest, ManifestConfig
from repo_copilot.core.models.repository import HostConfig, Repository, RepositoryURL

__all__ = [
    "DisplayFormat",
    "HostConfig",
    "Manifest",
    "ManifestConfig",
    "Repository",
    "RepositoryURL",
]
