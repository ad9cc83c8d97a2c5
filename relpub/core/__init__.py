"""Core domain types and logic."""

from .config import ConfigError, WorkspaceConfig, load_config
from .errors import ErrorCode
from .graph import ProjectGraph, ProjectNode, TargetConfig, project_has_target
from .result import Err, Ok, Result, is_err, is_ok
from .workspace import Workspace, WorkspaceError, detect_workspace

__all__ = [
    # config
    "ConfigError",
    "WorkspaceConfig",
    "load_config",
    # errors
    "ErrorCode",
    # graph
    "ProjectGraph",
    "ProjectNode",
    "TargetConfig",
    "project_has_target",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # workspace
    "Workspace",
    "WorkspaceError",
    "detect_workspace",
]
