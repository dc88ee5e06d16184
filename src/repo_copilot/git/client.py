"""Thin wrapper around the git executable."""

import subprocess
from pathlib import Path

import structlog

from repo_copilot.core.exceptions import GitError

logger = structlog.get_logger(__name__)


class GitClient:
    """Runs git commands through subprocess.

    Uses the git CLI directly (no gitpython dependency). Failures,
    including a missing git binary, surface as ``GitError``.
    """

    def __init__(self, executable: str = "git") -> None:
        self._executable = executable

    def run(self, *args: str, cwd: str | Path | None = None) -> str:
        """Run a git command and return stdout."""
        command = [self._executable, *args]
        logger.debug("Running git", args=list(args), cwd=str(cwd) if cwd else None)
        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise GitError(
                f"git executable not found: {self._executable}",
                details={"command": command},
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise GitError(
                f"git {args[0]} failed: {stderr or f'exit status {e.returncode}'}",
                details={"command": command, "returncode": e.returncode, "stderr": stderr},
            ) from e
        return result.stdout.strip()

    def clone(self, url: str, dest: str | Path) -> None:
        """Clone ``url`` into ``dest``, creating parent directories."""
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Cloning repository", url=url, path=str(dest))
        self.run("clone", url, str(dest))

    def is_work_tree(self, path: str | Path) -> bool:
        """Check whether ``path`` is the top level of a git work tree."""
        path = Path(path)
        if not (path / ".git").exists():
            return False
        try:
            return self.run("rev-parse", "--is-inside-work-tree", cwd=path) == "true"
        except GitError:
            return False

    def status_porcelain(self, path: str | Path) -> str:
        return self.run("status", "--porcelain", cwd=path)

    def is_clean(self, path: str | Path) -> bool:
        """True when the work tree has no uncommitted or untracked changes."""
        return self.status_porcelain(path) == ""

    def set_identity(self, path: str | Path, username: str = "", email: str = "") -> None:
        """Set the repository-local author identity, skipping empty values."""
        if username:
            self.run("config", "user.name", username, cwd=path)
        if email:
            self.run("config", "user.email", email, cwd=path)
