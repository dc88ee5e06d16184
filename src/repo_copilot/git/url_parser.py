"""Repository URL parsing."""

import re

from repo_copilot.core.exceptions import InvalidRepositoryURLError
from repo_copilot.core.models.repository import RepositoryURL
from repo_copilot.utils.paths import is_path_segment

# [scheme://][user@]host/owner/name
_URL_PATTERN = re.compile(
    r"^(?:[A-Za-z][A-Za-z0-9+.-]*://)?(?:[^@/]+@)?([^/]+)/([^/]+)/([^/]+)$"
)


def parse_repository_url(url: str) -> RepositoryURL:
    """Split a repository URL into host, owner and name.

    Supports:
    - github.com/owner/name
    - github.com/owner/name.git
    - https://gitlab.com/owner/name.git
    - ssh://git@git.example.com/owner/name

    Each segment becomes a directory level under the base directory,
    so "." and ".." are refused.

    Raises:
        InvalidRepositoryURLError: if the URL has any other shape.
    """
    candidate = (url or "").strip()
    candidate = re.sub(r"\.git$", "", candidate)

    match = _URL_PATTERN.match(candidate)
    if not match or not all(is_path_segment(part) for part in match.groups()):
        raise InvalidRepositoryURLError(
            "Invalid repository URL",
            details={"url": url},
        )

    host, owner, name = match.groups()
    return RepositoryURL(host=host, owner=owner, name=name)
