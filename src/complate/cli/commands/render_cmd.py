"""``complate render`` command.

Examples:
    complate render -t greet
    complate -e render -t greet -v name=Ava --backend headless
    complate render --backend cli --trust prompt
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import typer
from rich.console import Console

from complate.config import (
    ConfigError,
    load_config,
    resolve_config_path,
    shell_timeout_from_env,
)
from complate.render import (
    BackendKind,
    MissingRequiredVariables,
    Privilege,
    RenderCancelled,
    RenderError,
    RenderRequest,
    TrustMode,
    render_request,
)

console = Console(stderr=True)


class OverrideParseError(ValueError):
    """Raised when a ``--value`` argument is not of the form key=value."""


def parse_overrides(pairs: Iterable[str] | None) -> dict[str, str]:
    """Split ``key=value`` strings on the first ``=``.

    Examples:
        >>> parse_overrides(["name=Ava", "expr=a=b"])
        {'name': 'Ava', 'expr': 'a=b'}
    """
    overrides: dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise OverrideParseError(f"Invalid value override (expected KEY=VALUE): {pair}")
        key, value = pair.split("=", 1)
        if not key:
            raise OverrideParseError(f"Invalid value override (empty key): {pair}")
        overrides[key] = value
    return overrides


def render(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="The configuration file to use (default: ./.complate/config.yaml or $COMPLATE_CONFIG).",
    ),
    template: Optional[str] = typer.Option(
        None,
        "--template",
        "-t",
        help="Template to render; skips the selection step.",
    ),
    values: Optional[List[str]] = typer.Option(
        None,
        "--value",
        "-v",
        help="Override a value with KEY=VALUE (repeatable, experimental).",
    ),
    trust: TrustMode = typer.Option(
        TrustMode.NONE,
        "--trust",
        help="Shell command execution policy. 'ultimate' runs shell defaults without asking; "
        "only use it for trustworthy configurations.",
    ),
    loose: bool = typer.Option(
        False,
        "--loose",
        "-l",
        help="Non-strict mode: missing values render as empty strings.",
    ),
    backend: BackendKind = typer.Option(
        BackendKind.HEADLESS,
        "--backend",
        "-b",
        help="Interaction backend (headless, cli=line prompts, ui=full-screen, experimental).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the rendered text to a file instead of stdout.",
    ),
) -> None:
    """Render a template by resolving its values as specified by the configuration."""
    privilege = Privilege.NORMAL
    if ctx.obj is not None:
        privilege = ctx.obj.get("privilege", Privilege.NORMAL)

    try:
        overrides = parse_overrides(values)
        config = load_config(resolve_config_path(config_path))
        shell_timeout = shell_timeout_from_env()
    except (OverrideParseError, ConfigError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    request = RenderRequest(
        config=config,
        template_name=template,
        overrides=overrides,
        trust_mode=trust,
        backend=backend,
        loose=loose,
        privilege=privilege,
        shell_timeout=shell_timeout,
    )

    try:
        rendered = render_request(request)
    except RenderCancelled:
        console.print("[yellow]Render cancelled.[/yellow]")
        raise typer.Exit(130)
    except MissingRequiredVariables as e:
        console.print(f"[red]Error ({e.stage}):[/red] missing value for required variable(s):")
        for name in e.missing:
            console.print(f"  - {name}")
        console.print("[dim]Provide the values or use --loose to render with empty values.[/dim]")
        raise typer.Exit(1)
    except RenderError as e:
        console.print(f"[red]Error ({e.stage}):[/red] {e}")
        raise typer.Exit(1)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        console.print(f"[green]✓[/green] Rendered to {output}")
        return

    typer.echo(rendered)
