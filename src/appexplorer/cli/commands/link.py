import json
from pathlib import Path
from typing import List, Optional

import typer
from needle.pointer import L

from appexplorer.cli.factories import make_app
from appexplorer.common import bus, appexplorer_operator as nexus
from appexplorer.spec import AppExplorerError, CrossReferenceLink


def _read_links(path: Path) -> List[CrossReferenceLink]:
    """A JSON object mapping each tag location to its confirmed permalink."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ValueError("expected an object of location/permalink strings")
    return [CrossReferenceLink(location=k, permalink=v) for k, v in data.items()]


def link_command(
    location: Optional[str] = typer.Argument(None, help=nexus(L.cli.argument.location.help)),
    permalink: Optional[str] = typer.Argument(None, help=nexus(L.cli.argument.permalink.help)),
    links_file: Optional[Path] = typer.Option(
        None, "--links", help=nexus(L.cli.option.links.help)
    ),
    root: Optional[Path] = typer.Option(None, "--root", help=nexus(L.cli.option.root.help)),
):
    links: List[CrossReferenceLink] = []
    if links_file is not None:
        try:
            links.extend(_read_links(links_file))
        except (OSError, ValueError) as e:
            bus.error(L.error.link.invalid_file, path=links_file, error=e)
            raise typer.Exit(code=1)
    if location is not None:
        if permalink is None:
            bus.error(L.error.link.missing_permalink, location=location)
            raise typer.Exit(code=2)
        links.append(CrossReferenceLink(location=location, permalink=permalink))
    if not links:
        bus.error(L.error.link.nothing)
        raise typer.Exit(code=2)

    app_instance = make_app(root)
    try:
        app_instance.run_links(links)
    except AppExplorerError as e:
        bus.error(L.error.link.failed, location=location or links_file, error=e)
        raise typer.Exit(code=1)
