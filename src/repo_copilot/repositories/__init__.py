"""Persistence for the manifest documents."""

from repo_copilot.repositories.manifest import ManifestRepository

__all__ = ["ManifestRepository"]
