"""Privilege gate for render requests.

Runs once before any resolution work. A rejection is fatal and nothing is
rendered.
"""

from __future__ import annotations

import logging
from typing import Mapping

from .exceptions import PrivilegeDenied
from .models import BackendKind, Privilege, TrustMode

logger = logging.getLogger(__name__)


def check_privileges(
    privilege: Privilege,
    backend: BackendKind,
    overrides: Mapping[str, str],
    trust_mode: TrustMode,
) -> None:
    """Reject combinations not permitted under the active privilege level.

    Rules:
    - NORMAL: the ``ui`` backend is experimental and rejected
    - NORMAL: value overrides are experimental and rejected
    - EXPERIMENTAL: both of the above pass
    - any level: ``prompt`` trust on the headless backend is rejected,
      because headless cannot answer a confirmation

    Raises:
        PrivilegeDenied: If the combination is not permitted.

    Examples:
        >>> check_privileges(Privilege.NORMAL, BackendKind.CLI, {}, TrustMode.NONE)
        >>> check_privileges(Privilege.EXPERIMENTAL, BackendKind.UI, {"a": "b"}, TrustMode.ULTIMATE)
    """
    if privilege == Privilege.NORMAL:
        if backend == BackendKind.UI:
            raise PrivilegeDenied(
                "Cannot use the 'ui' backend without experimental features "
                "being activated (--experimental)."
            )
        if overrides:
            raise PrivilegeDenied(
                "Value overrides are an experimental feature and need the "
                "--experimental flag to be active."
            )

    if backend == BackendKind.HEADLESS and trust_mode == TrustMode.PROMPT:
        raise PrivilegeDenied(
            "Trust mode 'prompt' requires an interactive backend; the headless "
            "backend cannot confirm shell commands. Use --trust none|ultimate "
            "or --backend cli."
        )

    logger.debug(
        "Privilege check passed (privilege=%s, backend=%s, overrides=%d, trust=%s)",
        privilege,
        backend,
        len(overrides),
        trust_mode,
    )
