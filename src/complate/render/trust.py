"""Shell trust gate and shell-command execution for computed defaults."""

from __future__ import annotations

import logging
import subprocess
from enum import StrEnum
from typing import TYPE_CHECKING, Callable, Optional

from .models import TrustMode

if TYPE_CHECKING:
    from .backends import Backend

logger = logging.getLogger(__name__)

DEFAULT_SHELL_TIMEOUT = 30.0

ShellRunner = Callable[[str, Optional[float]], Optional[str]]


class Decision(StrEnum):
    """Outcome of a trust check for one command."""

    RUN = "run"
    SKIP = "skip"
    ABORT = "abort"


class ShellTrustGate:
    """Decide whether a shell-computed default may run.

    The mode is fixed for the lifetime of the gate (one render).

    Usage:
        gate = ShellTrustGate(TrustMode.PROMPT, backend)
        if gate.authorize("git config user.name") == Decision.RUN:
            ...
    """

    def __init__(self, mode: TrustMode, backend: "Backend | None" = None) -> None:
        self._mode = mode
        self._backend = backend

    @property
    def mode(self) -> TrustMode:
        return self._mode

    def authorize(self, command: str) -> Decision:
        """Return the decision for ``command`` under the active trust mode."""
        if self._mode == TrustMode.NONE:
            return Decision.SKIP
        if self._mode == TrustMode.ULTIMATE:
            return Decision.RUN

        if self._backend is None or not self._backend.can_confirm:
            return Decision.ABORT
        if self._backend.confirm(f"Run shell command `{command}`?"):
            return Decision.RUN
        return Decision.SKIP


def run_shell_command(command: str, timeout: float | None = DEFAULT_SHELL_TIMEOUT) -> str | None:
    """Run ``command`` through the system shell and return its stdout.

    Trailing newlines are stripped. Non-zero exit, timeout or an OS error
    yield None so that resolution falls through to the next source.
    """
    try:
        completed = subprocess.run(
            command,
            shell=True,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("Shell default timed out after %ss: %s", timeout, command)
        return None
    except OSError as exc:
        logger.warning("Shell default could not be started: %s (%s)", command, exc)
        return None

    if completed.returncode != 0:
        logger.warning(
            "Shell default exited with status %d: %s (%s)",
            completed.returncode,
            command,
            (completed.stderr or "").strip(),
        )
        return None

    return (completed.stdout or "").rstrip("\r\n")
