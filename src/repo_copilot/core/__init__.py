"""Core domain models and exceptions for repo-copilot."""

from repo_copilot.core.exceptions import (
    AmbiguousRepositoryError,
    ConfigExistsError,
    ConflictError,
    GitError,
    InvalidRepositoryURLError,
    ManifestError,
    NotFoundError,
    PathOutsideBaseDirError,
    PreconditionError,
    RepoCopilotError,
    RepositoryExistsError,
    RepositoryNotFoundError,
    UncommittedChangesError,
    ValidationError,
)
from repo_copilot.core.models import (
    DisplayFormat,
    HostConfig,
    Manifest,
    ManifestConfig,
    Repository,
    RepositoryURL,
)

__all__ = [
    # Models
    "DisplayFormat",
    "HostConfig",
    "Manifest",
    "ManifestConfig",
    "Repository",
    "RepositoryURL",
    # Exceptions
    "RepoCopilotError",
    "ValidationError",
    "InvalidRepositoryURLError",
    "NotFoundError",
    "RepositoryNotFoundError",
    "ConflictError",
    "RepositoryExistsError",
    "ConfigExistsError",
    "AmbiguousRepositoryError",
    "PreconditionError",
    "PathOutsideBaseDirError",
    "UncommittedChangesError",
    "GitError",
    "ManifestError",
]
