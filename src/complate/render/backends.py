"""Interaction backends for template selection and value collection.

Three fixed variants share one protocol:

    HeadlessBackend    -- never interacts; ambiguous selection is an error
    LinePromptBackend  -- numbered lists and line prompts on text streams
    FullScreenBackend  -- arrow-key picker and line editor (rich + readchar)

The resolver calls ``query`` at most once per variable.
"""

from __future__ import annotations

import sys
from typing import Protocol, Sequence, TextIO

import typer
from rich.console import Console

from .exceptions import NoTemplateSelected, RenderCancelled
from .models import BackendKind, VariableSpec

_SKIP_OPTION = "(skip)"


class Backend(Protocol):
    """Capability interface shared by all interaction backends."""

    can_confirm: bool

    def select_template(self, candidates: Sequence[str]) -> str:
        """Pick one template name out of ``candidates`` (more than one)."""
        ...

    def query(self, variable: VariableSpec) -> str | None:
        """Ask for a value. None means "no answer"."""
        ...

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question."""
        ...


class HeadlessBackend:
    """Backend for non-interactive use (CI, scripts, pipes)."""

    can_confirm = False

    def select_template(self, candidates: Sequence[str]) -> str:
        raise NoTemplateSelected(candidates)

    def query(self, variable: VariableSpec) -> str | None:
        return None

    def confirm(self, message: str) -> bool:
        raise RuntimeError("Headless backend cannot ask for confirmation")


class LinePromptBackend:
    """Line-based prompts: answers from stdin, prompts on stderr by default.

    Empty input means "no answer" so resolution continues down the
    precedence chain. End of input or Ctrl+C cancels the render. In numbered
    lists a number always picks by position, before any match by value.
    """

    can_confirm = True

    def __init__(self, stdin: TextIO | None = None, output: TextIO | None = None) -> None:
        self._process_streams = stdin is None and output is None
        self._stdin = stdin if stdin is not None else sys.stdin
        self._output = output if output is not None else sys.stderr

    def _write(self, text: str) -> None:
        self._output.write(text)
        self._output.flush()

    def _read_line(self, prompt: str) -> str:
        self._write(prompt)
        try:
            line = self._stdin.readline()
        except KeyboardInterrupt:
            raise RenderCancelled() from None
        if line == "":
            raise RenderCancelled("Input closed before an answer was given.")
        return line.rstrip("\r\n")

    def _choose(self, title: str, choices: Sequence[str], allow_skip: bool) -> str | None:
        self._write(f"{title}\n")
        for idx, choice in enumerate(choices, start=1):
            self._write(f"  [{idx}] {choice}\n")

        while True:
            response = self._read_line(f"Select [1-{len(choices)}]: ").strip()
            if not response:
                if allow_skip:
                    return None
                continue
            if response.isdigit() and 1 <= int(response) <= len(choices):
                return choices[int(response) - 1]
            if response in choices:
                return response
            self._write(f"Error: Invalid choice '{response}'.\n")

    def select_template(self, candidates: Sequence[str]) -> str:
        selected = None
        while selected is None:
            selected = self._choose("Select a template:", list(candidates), allow_skip=False)
        return selected

    def query(self, variable: VariableSpec) -> str | None:
        if variable.options:
            return self._choose(f"{variable.label}:", list(variable.options), allow_skip=True)

        answer = self._read_line(f"{variable.label}: ")
        return answer if answer else None

    def confirm(self, message: str) -> bool:
        if self._process_streams:
            try:
                return typer.confirm(message, default=False, err=True)
            except typer.Abort:
                raise RenderCancelled() from None

        response = self._read_line(f"{message} [y/N]: ").strip().lower()
        return response in ("y", "yes")


class FullScreenBackend:
    """Arrow-key picker and line editor drawn with Rich Live panels.

    Esc or Ctrl+C anywhere raises RenderCancelled and aborts the render.
    """

    can_confirm = True

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    def select_template(self, candidates: Sequence[str]) -> str:
        from complate.cli.ui import select_with_arrows

        return select_with_arrows(
            {name: "" for name in candidates},
            prompt_text="Select a template",
            console=self._console,
        )

    def query(self, variable: VariableSpec) -> str | None:
        from complate.cli.ui import edit_line, select_with_arrows

        if variable.options:
            options = {option: "" for option in variable.options}
            options[_SKIP_OPTION] = "no answer"
            choice = select_with_arrows(options, prompt_text=variable.label, console=self._console)
            return None if choice == _SKIP_OPTION else choice

        answer = edit_line(variable.label, console=self._console)
        return answer if answer else None

    def confirm(self, message: str) -> bool:
        from complate.cli.ui import confirm_with_arrows

        return confirm_with_arrows(message, console=self._console)


_BACKENDS: dict[BackendKind, type] = {
    BackendKind.HEADLESS: HeadlessBackend,
    BackendKind.CLI: LinePromptBackend,
    BackendKind.UI: FullScreenBackend,
}


def create_backend(kind: BackendKind) -> Backend:
    """Instantiate the backend for ``kind``."""
    try:
        return _BACKENDS[BackendKind(kind)]()
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unknown backend: {kind}") from exc
