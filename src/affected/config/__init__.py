"""Config module exports."""

from affected.config.loader import load_config
from affected.config.models import (
    AffectedConfig,
    GitHubConfig,
    LayoutConfig,
    LoggingConfig,
)
from affected.config.workspace import (
    WorkspaceConfig,
    WorkspaceLayout,
    load_workspace_config,
)

__all__ = [
    "load_config",
    "load_workspace_config",
    "AffectedConfig",
    "GitHubConfig",
    "LayoutConfig",
    "LoggingConfig",
    "WorkspaceConfig",
    "WorkspaceLayout",
]
