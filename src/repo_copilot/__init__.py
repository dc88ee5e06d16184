"""repo-copilot: track locally cloned Git repositories in a YAML manifest."""

__version__ = "0.1.0"
