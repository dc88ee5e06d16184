"""Business logic services for repo-copilot."""

from repo_copilot.services.manifest import ManifestService

__all__ = ["ManifestService"]
