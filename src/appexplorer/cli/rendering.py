import typer

from appexplorer.common.messaging import protocols

# success sits between info and warning: hidden at --loglevel warning
LEVEL_ORDER = {"debug": 10, "info": 20, "success": 25, "warning": 30, "error": 40}


class CliRenderer(protocols.Renderer):
    """
    Renders messages to the command line using Typer for colored output.

    Messages go to stderr so that command output (JSON, edges) on stdout
    stays machine-readable.
    """

    def __init__(self, loglevel: str = "info"):
        self.threshold = LEVEL_ORDER.get(loglevel.lower(), LEVEL_ORDER["info"])

    def render(self, message: str, level: str) -> None:
        if LEVEL_ORDER.get(level, LEVEL_ORDER["info"]) < self.threshold:
            return

        color = None
        if level == "success":
            color = typer.colors.GREEN
        elif level == "warning":
            color = typer.colors.YELLOW
        elif level == "error":
            color = typer.colors.RED
        elif level == "debug":
            color = typer.colors.BRIGHT_BLACK

        typer.secho(message, fg=color, err=True)
