import click
import typer
from needle.pointer import L

from appexplorer.common import bus, appexplorer_operator as nexus
from .commands.index import index_command
from .commands.link import link_command
from .commands.scan import graph_command, scan_command
from .rendering import LEVEL_ORDER, CliRenderer

app = typer.Typer(
    name="appexplorer",
    help=nexus(L.cli.app.help),
    no_args_is_help=True,
)


@app.callback()
def main(
    loglevel: str = typer.Option(
        "info",
        "--loglevel",
        help=nexus(L.cli.option.loglevel.help),
        click_type=click.Choice(
            [level for level in LEVEL_ORDER if level != "success"], case_sensitive=False
        ),
    ),
):
    # --- Composition Root for CLI output ---
    bus.set_renderer(CliRenderer(loglevel=loglevel))


app.command(name="scan", help=nexus(L.cli.command.scan.help))(scan_command)
app.command(name="link", help=nexus(L.cli.command.link.help))(link_command)
app.command(name="index", help=nexus(L.cli.command.index.help))(index_command)
app.command(name="graph", help=nexus(L.cli.command.graph.help))(graph_command)


if __name__ == "__main__":
    app()
