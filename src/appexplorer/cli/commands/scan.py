import json
from pathlib import Path
from typing import List, Optional

import typer
from needle.pointer import L

from appexplorer.cli.factories import make_app
from appexplorer.common import appexplorer_operator as nexus


def scan_command(
    paths: Optional[List[Path]] = typer.Argument(
        None, help=nexus(L.cli.argument.paths.help)
    ),
    root: Optional[Path] = typer.Option(None, "--root", help=nexus(L.cli.option.root.help)),
):
    app_instance = make_app(root)
    reports = app_instance.run_scan(paths)
    typer.echo(json.dumps([report.to_dict() for report in reports], indent=2))
    if app_instance.failed_paths:
        raise typer.Exit(code=1)


def graph_command(
    paths: Optional[List[Path]] = typer.Argument(
        None, help=nexus(L.cli.argument.paths.help)
    ),
    root: Optional[Path] = typer.Option(None, "--root", help=nexus(L.cli.option.root.help)),
):
    app_instance = make_app(root)
    graph = app_instance.run_graph(paths)
    for source, target in app_instance.graph_builder.edges(graph):
        typer.echo(f"{source} -> {target}")
    if app_instance.failed_paths:
        raise typer.Exit(code=1)
