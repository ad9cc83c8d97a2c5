"""relpub: release-publish orchestrator for multi-project workspaces."""

__version__ = "0.1.0"
