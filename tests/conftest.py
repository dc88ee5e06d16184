"""Pytest configuration and fixtures."""

import subprocess
from pathlib import Path

import pytest

from repo_copilot.config.settings import get_settings
from repo_copilot.repositories.manifest import ManifestRepository
from repo_copilot.services.manifest import ManifestService


def _git(*args: str, cwd: Path) -> None:
    subprocess.run(["git", *args], cwd=cwd, capture_output=True, check=True)


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point REPO_COPILOT_CONFIG_DIR at a temporary directory."""
    path = tmp_path / ".repo-copilot"
    monkeypatch.setenv("REPO_COPILOT_CONFIG_DIR", str(path))
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def store(config_dir: Path) -> ManifestRepository:
    return ManifestRepository(config_dir)


@pytest.fixture
def service(store: ManifestRepository) -> ManifestService:
    return ManifestService(store=store)


@pytest.fixture
def initialized_service(service: ManifestService, base_dir: Path) -> ManifestService:
    """A service whose configuration points at ``base_dir``."""
    service.init(base_dir=str(base_dir), username="Test", email="test@test.com")
    return service


@pytest.fixture
def make_git_repo():
    """Create a Git repository with one commit at the given path."""

    def _make(path: Path) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        _git("init", cwd=path)
        _git("config", "user.email", "test@test.com", cwd=path)
        _git("config", "user.name", "Test", cwd=path)
        (path / "README.md").write_text("# Test Repo\n")
        _git("add", ".", cwd=path)
        _git("commit", "-m", "Initial commit", cwd=path)
        return path

    return _make
