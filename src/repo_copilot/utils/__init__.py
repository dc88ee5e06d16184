"""Filesystem helpers."""

from repo_copilot.utils.paths import exists, is_empty_dir, is_path_segment, is_subpath

__all__ = ["exists", "is_empty_dir", "is_path_segment", "is_subpath"]
