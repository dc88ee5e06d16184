"""Exception hierarchy for repo-copilot."""

from typing import Any


class RepoCopilotError(Exception):
    """Base exception for all repo-copilot errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ValidationError(RepoCopilotError):
    """Raised when user input is malformed."""


class InvalidRepositoryURLError(ValidationError):
    """Raised when a repository URL is not of the form host/owner/name."""


class NotFoundError(RepoCopilotError):
    """Raised when a requested entity does not exist."""


class RepositoryNotFoundError(NotFoundError):
    """Raised when no tracked repository matches the given name."""


class ConflictError(RepoCopilotError):
    """Raised when an operation would clash with existing state."""


class RepositoryExistsError(ConflictError):
    """Raised when a repository URL is already tracked."""


class ConfigExistsError(ConflictError):
    """Raised when initializing over an existing configuration."""


class AmbiguousRepositoryError(ConflictError):
    """Raised when a name matches more than one tracked repository."""


class PreconditionError(RepoCopilotError):
    """Raised when a safety check refuses a destructive operation."""


class PathOutsideBaseDirError(PreconditionError):
    """Raised when a repository path is not inside the base directory."""


class UncommittedChangesError(PreconditionError):
    """Raised when a work tree has uncommitted changes."""


class GitError(RepoCopilotError):
    """Raised when a git subprocess fails."""


class ManifestError(RepoCopilotError):
    """Raised when a manifest document cannot be read or written."""
