import os
from pathlib import Path
from typing import List, Optional

from appexplorer.spec import SourceNotFoundError
from appexplorer.spec.location import normalize_rel_path
from .config import AppExplorerConfig, load_config_from_path

ROOT_ENV_VAR = "APPEXPLORER_REPO_ROOT"

# Directories that never hold first-party sources.
EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".idea",
    ".vscode",
    ".next",
    ".turbo",
    ".cache",
    "node_modules",
    "build",
    "dist",
    "coverage",
    "out",
}


def find_workspace_root(start_dir: Optional[Path] = None) -> Path:
    """
    Finds the repository root by searching upwards for common markers.
    Search priority: APPEXPLORER_REPO_ROOT -> pyproject.toml / package.json -> .git
    """
    env_root = os.getenv(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root).resolve()

    start = (start_dir or Path.cwd()).resolve()
    current_dir = start
    while current_dir.parent != current_dir:  # Stop at filesystem root
        if (current_dir / "pyproject.toml").is_file():
            return current_dir
        if (current_dir / "package.json").is_file():
            return current_dir
        if (current_dir / ".git").exists():
            return current_dir
        current_dir = current_dir.parent
    # Fallback to the starting directory if no markers are found
    return start


class Workspace:
    def __init__(self, root_path: Path, config: Optional[AppExplorerConfig] = None):
        self.root_path = root_path.resolve()
        self.config = config or load_config_from_path(self.root_path)

    def relative_path(self, path: Path) -> str:
        """Returns the repository-relative, forward-slash form of `path`."""
        if not path.is_absolute():
            return normalize_rel_path(str(path))
        try:
            return path.resolve().relative_to(self.root_path).as_posix()
        except ValueError:
            raise SourceNotFoundError(
                f"Source path {path} is not within the project root {self.root_path}"
            ) from None

    def _is_candidate(self, path: Path) -> bool:
        if path.suffix not in self.config.extensions:
            return False
        # Type declaration files carry no components or annotations of their own
        if path.name.endswith(".d.ts"):
            return False
        return not any(part in EXCLUDED_DIRS for part in path.parts)

    def discover_files(self) -> List[str]:
        files = set()
        for scan_path_str in self.config.scan_paths:
            scan_path = self.root_path / scan_path_str
            if scan_path.is_dir():
                for candidate in scan_path.rglob("*"):
                    rel = candidate.relative_to(self.root_path)
                    if candidate.is_file() and self._is_candidate(rel):
                        files.add(rel.as_posix())
            elif scan_path.is_file():
                files.add(scan_path.relative_to(self.root_path).as_posix())
        return sorted(files)
