"""``complate init`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from complate.config import DEFAULT_CONFIG_PATH, ConfigError, write_default_config

console = Console()


def init(
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        help="Where to write the configuration (default: ./.complate/config.yaml).",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing configuration."),
) -> None:
    """Initialize a starter configuration in ./.complate/config.yaml."""
    try:
        written = write_default_config(path or DEFAULT_CONFIG_PATH, force=force)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Wrote starter configuration to {written}")
    console.print("[dim]Run 'complate render --backend cli' to try it.[/dim]")
