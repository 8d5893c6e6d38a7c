from .config import AppExplorerConfig, load_config_from_path
from .core import ROOT_ENV_VAR, Workspace, find_workspace_root
from .git import RepoInfo, read_repo_info

__all__ = [
    "AppExplorerConfig",
    "load_config_from_path",
    "ROOT_ENV_VAR",
    "Workspace",
    "find_workspace_root",
    "RepoInfo",
    "read_repo_info",
]
