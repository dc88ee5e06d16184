"""Process settings and logging setup."""

from repo_copilot.config.logging import configure_logging
from repo_copilot.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
