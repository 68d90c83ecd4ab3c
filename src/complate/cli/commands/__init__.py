"""CLI command modules for complate."""

from __future__ import annotations

import typer

from .init_cmd import init
from .render_cmd import render


def register_commands(app: typer.Typer) -> None:
    """Attach every top-level command to ``app``."""
    app.command()(init)
    app.command()(render)


__all__ = ["init", "render", "register_commands"]
