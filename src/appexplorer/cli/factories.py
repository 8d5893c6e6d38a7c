from pathlib import Path
from typing import Optional

import typer
from needle.pointer import L

from appexplorer.app import AppExplorerApp
from appexplorer.common import bus
from appexplorer.spec import ConfigError
from appexplorer.workspace import find_workspace_root


def make_app(root: Optional[Path] = None) -> AppExplorerApp:
    root_path = root.resolve() if root else find_workspace_root(Path.cwd())
    try:
        return AppExplorerApp(root_path=root_path)
    except ConfigError as e:
        bus.error(L.error.config.invalid, error=e)
        raise typer.Exit(code=1)
