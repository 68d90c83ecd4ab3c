"""Full-screen terminal widgets used by the ``ui`` backend."""

from __future__ import annotations

from typing import Dict, Optional

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from complate.render.exceptions import RenderCancelled


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP or key == readchar.key.CTRL_P:
        return "up"
    if key == readchar.key.DOWN or key == readchar.key.CTRL_N:
        return "down"

    if key in (readchar.key.ENTER, readchar.key.CR, readchar.key.LF):
        return "enter"

    if key in (readchar.key.BACKSPACE, "\x08", "\x7f"):
        return "backspace"

    if key == readchar.key.ESC or key == "\x1b":
        return "escape"

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def _resolve_console(console: Optional[Console]) -> Console:
    return console or Console()


def _cancelled(console: Console) -> RenderCancelled:
    console.print("\n[yellow]Selection cancelled[/yellow]")
    return RenderCancelled()


def select_with_arrows(
    options: Dict[str, str],
    prompt_text: str = "Select an option",
    default_key: str | None = None,
    console: Console | None = None,
) -> str:
    """
    Interactive selection using arrow keys with Rich Live display.

    Raises:
        RenderCancelled: On Esc or Ctrl+C.
    """
    console = _resolve_console(console)
    option_keys = list(options.keys())
    if not option_keys:
        raise ValueError("select_with_arrows requires at least one option")
    if default_key and default_key in option_keys:
        selected_index = option_keys.index(default_key)
    else:
        selected_index = 0

    def create_selection_panel():
        """Create the selection panel with current selection highlighted."""
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        for i, key in enumerate(option_keys):
            detail = f" [dim]({options[key]})[/dim]" if options[key] else ""
            pointer = "▶" if i == selected_index else " "
            table.add_row(pointer, f"[cyan]{key}[/cyan]{detail}")

        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")

        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )

    console.print()

    with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                raise _cancelled(console) from None
            if key == "up":
                selected_index = (selected_index - 1) % len(option_keys)
            elif key == "down":
                selected_index = (selected_index + 1) % len(option_keys)
            elif key == "enter":
                return option_keys[selected_index]
            elif key == "escape":
                raise _cancelled(console)

            live.update(create_selection_panel(), refresh=True)


def edit_line(
    prompt_text: str,
    initial: str = "",
    console: Console | None = None,
) -> str:
    """Single-line editor drawn in a Rich Live panel.

    Returns the typed text (possibly empty) on Enter.

    Raises:
        RenderCancelled: On Esc or Ctrl+C.
    """
    console = _resolve_console(console)
    buffer = list(initial)

    def create_editor_panel():
        text = Text("".join(buffer), style="white")
        text.append("▏", style="cyan")
        table = Table.grid(padding=(0, 1))
        table.add_column()
        table.add_row(text)
        table.add_row("")
        table.add_row("[dim]Enter to accept (empty skips), Esc to cancel[/dim]")
        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )

    console.print()

    with Live(create_editor_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                raise _cancelled(console) from None
            if key == "enter":
                return "".join(buffer)
            if key == "escape":
                raise _cancelled(console)
            if key == "backspace":
                if buffer:
                    buffer.pop()
            elif len(key) == 1 and key.isprintable():
                buffer.append(key)

            live.update(create_editor_panel(), refresh=True)


def confirm_with_arrows(
    prompt_text: str,
    default: bool = False,
    console: Console | None = None,
) -> bool:
    """Yes/no picker built on :func:`select_with_arrows`."""
    choice = select_with_arrows(
        {"yes": "", "no": ""},
        prompt_text=prompt_text,
        default_key="yes" if default else "no",
        console=console,
    )
    return choice == "yes"


__all__ = [
    "confirm_with_arrows",
    "edit_line",
    "get_key",
    "select_with_arrows",
]
