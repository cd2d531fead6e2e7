"""
lxcport CLI entry point.

Usage:
    lxcport [OPTIONS] COMMAND [ARGS]...

Commands:
    port      Port forwarding management
    version   Show version information
"""

from typing import Annotated

import typer

from lxcport.cli.commands import port
from lxcport.cli.output import console
from lxcport.config import PortConfig
from lxcport.models.enums import LogLevel
from lxcport.utils.logger import configure_logging

app = typer.Typer(
    name="lxcport",
    help="Port forwarding for LXC containers",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(port.app, name="port", help="Manage port forwarding")


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Annotated[
        LogLevel | None,
        typer.Option(
            "--log-level",
            "-l",
            help="Logging level: full|debug|info|warning",
            case_sensitive=False,
        ),
    ] = None,
):
    """
    lxcport: manage host-to-container port forwarding with LXC proxy devices.
    """
    config = PortConfig.from_env()
    if log_level is not None:
        config.LOG_LEVEL = log_level
    configure_logging(config.LOG_LEVEL, config.LOG_FILE)
    ctx.obj = config


@app.command("version")
def version():
    """Show version information."""
    from lxcport import __version__

    console.print(f"lxcport v{__version__}")


def run():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
