"""
complate - text templating for command-line workflows.

Usage:
    complate init
    complate render --template greet --backend cli
    complate --experimental render -t greet -v name=Ava
"""

import logging

import typer

from complate.cli.commands import register_commands
from complate.render import Privilege

__version__ = "0.1.0"

app = typer.Typer(
    name="complate",
    help="Render text templates for CLI workflows from prompts, shell commands and defaults.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"complate {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    experimental: bool = typer.Option(
        False,
        "--experimental",
        "-e",
        help="Enable experimental features (ui backend, value overrides).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Show debug logging on stderr."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """Global options shared by all commands."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {
        "privilege": Privilege.EXPERIMENTAL if experimental else Privilege.NORMAL,
    }


register_commands(app)


def main():
    app()


if __name__ == "__main__":
    main()
