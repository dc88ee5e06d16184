"""Path helpers used before touching the filesystem."""

from pathlib import Path


def exists(path: str | Path) -> bool:
    """Check whether a file or directory exists at ``path``."""
    try:
        return Path(path).exists()
    except OSError:
        return False


def is_empty_dir(path: str | Path) -> bool:
    path = Path(path)
    return path.is_dir() and not any(path.iterdir())


def is_subpath(path: str | Path, base: str | Path) -> bool:
    """Return True when ``path`` is strictly inside ``base``.

    Both sides are resolved first, so ``..`` segments and symlinks
    cannot be used to escape. ``base`` itself is not a sub-path.
    """
    resolved = Path(path).expanduser().resolve()
    root = Path(base).expanduser().resolve()
    return resolved != root and root in resolved.parents


def is_path_segment(value: str) -> bool:
    """True when ``value`` names exactly one directory level.

    Rejects empty strings, ``.``/``..`` and anything containing a separator.
    """
    return bool(value) and value not in (".", "..") and "/" not in value and "\\" not in value
