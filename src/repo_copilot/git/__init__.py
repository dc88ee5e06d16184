"""Git integration for repo-copilot."""

from repo_copilot.git.client import GitClient
from repo_copilot.git.url_parser import parse_repository_url

__all__ = ["GitClient", "parse_repository_url"]
