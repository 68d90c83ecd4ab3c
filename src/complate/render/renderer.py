"""Placeholder substitution for template bodies."""

from __future__ import annotations

import re
from typing import Iterable

from .models import ResolvedValue

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([^{}]*?)\s*\}\}")


def _declared_pattern(names: Iterable[str]) -> re.Pattern[str]:
    # Longest first so a name never matches as a prefix of a longer one.
    alternatives = "|".join(re.escape(name) for name in sorted(names, key=len, reverse=True))
    return re.compile(r"\{\{\s*(" + alternatives + r")\s*\}\}")


def render(body: str, values: Iterable[ResolvedValue]) -> str:
    """Substitute ``{{ name }}`` placeholders in ``body``.

    Only placeholders for the names in ``values`` are replaced, whatever
    characters those names contain. Placeholders for undeclared names are
    left verbatim. Substitution is a single pass, so values are never
    re-scanned for placeholders.

    Examples:
        >>> from complate.render.models import ResolvedValue, ValueSource
        >>> render("Hello {{ name }}!", [ResolvedValue("name", "Ava", ValueSource.OVERRIDE)])
        'Hello Ava!'
        >>> render("{{ other }}", [])
        '{{ other }}'
    """
    lookup = {rv.name: rv.value for rv in values}
    if not lookup:
        return body

    return _declared_pattern(lookup).sub(lambda match: lookup[match.group(1)], body)


def placeholder_names(body: str) -> list[str]:
    """Distinct placeholder names in ``body``, in order of first appearance."""
    names: list[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(body):
        name = match.group(1)
        if name and name not in names:
            names.append(name)
    return names
