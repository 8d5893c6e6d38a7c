from pathlib import Path
from typing import List, Optional

import typer
from needle.pointer import L

from appexplorer.cli.factories import make_app
from appexplorer.common import appexplorer_operator as nexus


def index_command(
    paths: Optional[List[Path]] = typer.Argument(
        None, help=nexus(L.cli.argument.paths.help)
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help=nexus(L.cli.option.output.help)
    ),
    root: Optional[Path] = typer.Option(None, "--root", help=nexus(L.cli.option.root.help)),
):
    app_instance = make_app(root)
    app_instance.run_index(paths, output=output)
    if app_instance.failed_paths:
        raise typer.Exit(code=1)
