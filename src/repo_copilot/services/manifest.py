"""Manifest service: the logic behind each CLI command."""

import os
import shutil
from pathlib import Path

import structlog

from repo_copilot.core.exceptions import (
    AmbiguousRepositoryError,
    ConfigExistsError,
    ConflictError,
    PathOutsideBaseDirError,
    RepoCopilotError,
    RepositoryExistsError,
    RepositoryNotFoundError,
    UncommittedChangesError,
)
from repo_copilot.core.models.manifest import Manifest, ManifestConfig
from repo_copilot.core.models.repository import Repository, RepositoryURL
from repo_copilot.git.client import GitClient
from repo_copilot.git.url_parser import parse_repository_url
from repo_copilot.repositories.manifest import ManifestRepository
from repo_copilot.utils.paths import exists, is_empty_dir, is_path_segment, is_subpath

logger = structlog.get_logger(__name__)


class ManifestService:
    """Service for manifest operations.

    Every method validates before it mutates: a raised error leaves
    both the manifest files and the filesystem as they were.
    """

    def __init__(self, store: ManifestRepository, git: GitClient | None = None) -> None:
        self._store = store
        self._git = git or GitClient()

    @property
    def store(self) -> ManifestRepository:
        return self._store

    def load_config(self) -> ManifestConfig:
        return self._store.load_config()

    def init(
        self,
        base_dir: str | None = None,
        username: str | None = None,
        email: str | None = None,
        force: bool = False,
    ) -> ManifestConfig:
        """Write a fresh settings document.

        Existing repository records are kept; an empty repository list
        is created when none exists yet.
        """
        if self._store.exists() and not force:
            raise ConfigExistsError(
                "Configuration already exists. Use --force to overwrite.",
                details={"path": str(self._store.config_file)},
            )

        overrides: dict[str, str] = {}
        if base_dir:
            overrides["base_dir"] = os.path.abspath(os.path.expanduser(base_dir))
        if username:
            overrides["username"] = username
        if email:
            overrides["email"] = email

        config = ManifestConfig(**overrides)
        self._store.save_config(config)
        if not exists(self._store.repositories_file):
            self._store.save_repositories([])

        logger.info("Configuration initialized", config_dir=str(self._store.config_dir))
        return config

    def add(self, url: str, clone: bool = False) -> Repository:
        """Track a repository, optionally cloning it into the base directory."""
        parsed = parse_repository_url(url)
        manifest = self._store.load()

        if manifest.find_by_url(url) is not None:
            raise RepositoryExistsError("Repository already exists", details={"url": url})

        path = Path(manifest.config.base_dir) / parsed.host / parsed.owner / parsed.name
        logger.debug("Parsed repository URL", url=url, slug=parsed.slug, path=str(path))

        if clone:
            self._clone(url, parsed, path, manifest.config)

        repository = Repository(
            name=parsed.name,
            owner=parsed.owner,
            url=url,
            path=str(path),
            host=parsed.host,
        )
        manifest.repositories.append(repository)
        try:
            self._store.save_repositories(manifest.repositories)
        except RepoCopilotError:
            if clone:
                self._discard_clone(path)
            raise

        logger.info("Repository added", name=repository.name, path=repository.path)
        return repository

    def remove(self, name: str, force: bool = False, ignore_changes: bool = False) -> Repository:
        """Stop tracking a repository.

        With ``force`` the local directory is deleted as well, provided
        it is exactly ``base/host/owner/name`` for the record and, unless
        ``ignore_changes`` is set, has no uncommitted changes.
        """
        manifest = self._store.load()
        repository = self._lookup(manifest, name)

        if force:
            self._delete_local(repository, manifest.config, ignore_changes)

        manifest.repositories = [r for r in manifest.repositories if r.url != repository.url]
        self._store.save_repositories(manifest.repositories)

        logger.info("Repository removed", name=repository.name, deleted_files=force)
        return repository

    def list_repositories(self) -> list[Repository]:
        return self._store.load_repositories()

    def find(self, keyword: str) -> list[Repository]:
        """Repositories whose name, owner, host or url contain ``keyword``."""
        return [r for r in self._store.load_repositories() if r.matches(keyword)]

    def _lookup(self, manifest: Manifest, name: str) -> Repository:
        matches = manifest.find_by_name(name)
        if len(matches) > 1:
            raise AmbiguousRepositoryError(
                f'Repository name "{name}" is ambiguous; pass its URL instead',
                details={"name": name, "urls": [r.url for r in matches]},
            )
        if matches:
            return matches[0]

        by_url = manifest.find_by_url(name)
        if by_url is None:
            raise RepositoryNotFoundError(
                f'Repository "{name}" not found',
                details={"name": name},
            )
        return by_url

    def _clone(
        self,
        url: str,
        parsed: RepositoryURL,
        path: Path,
        config: ManifestConfig,
    ) -> None:
        if path.exists() and not is_empty_dir(path):
            raise ConflictError(
                f"Target directory is not empty: {path}",
                details={"path": str(path)},
            )

        source = url if "://" in url else parsed.clone_url
        self._git.clone(source, path)

        username, email = config.identity_for(parsed.host)
        try:
            self._git.set_identity(path, username=username, email=email)
        except RepoCopilotError:
            self._discard_clone(path)
            raise

    def _discard_clone(self, path: Path) -> None:
        """Delete a clone made by a failed ``add`` so it can be retried."""
        logger.warning("Discarding clone after failed add", path=str(path))
        shutil.rmtree(path, ignore_errors=True)

    def _delete_local(
        self,
        repository: Repository,
        config: ManifestConfig,
        ignore_changes: bool,
    ) -> None:
        path = Path(repository.path).expanduser().resolve()

        if not is_subpath(path, config.base_dir):
            raise PathOutsideBaseDirError(
                f"Refusing to delete {path}: not inside base directory {config.base_dir}",
                details={"path": str(path), "base_dir": config.base_dir},
            )

        # Only ever delete the record's own base/host/owner/name directory.
        segments = (repository.host, repository.owner, repository.name)
        expected = Path(config.base_dir).expanduser().resolve().joinpath(*segments)
        if not all(is_path_segment(s) for s in segments) or path != expected:
            raise PathOutsideBaseDirError(
                f"Refusing to delete {path}: expected the repository at {expected}",
                details={"path": str(path), "expected": str(expected)},
            )

        if not path.exists():
            logger.info("Local directory already gone", path=str(path))
            return

        if not ignore_changes and self._git.is_work_tree(path) and not self._git.is_clean(path):
            raise UncommittedChangesError(
                f"Repository at {path} has uncommitted changes. Use --yes to delete anyway.",
                details={"path": str(path)},
            )

        try:
            shutil.rmtree(path)
        except OSError as e:
            raise RepoCopilotError(
                f"Failed to delete {path}: {e}",
                details={"path": str(path)},
            ) from e
        logger.info("Local directory deleted", path=str(path))
