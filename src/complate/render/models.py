"""Core data models for template rendering."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping, Optional, Union


class Privilege(StrEnum):
    """Privilege level of the invocation (``--experimental`` flag)."""

    NORMAL = "normal"
    EXPERIMENTAL = "experimental"


class TrustMode(StrEnum):
    """Policy for executing shell-computed defaults.

    - NONE: shell defaults are never executed
    - PROMPT: the user confirms every command through the backend
    - ULTIMATE: shell defaults always run
    """

    NONE = "none"
    PROMPT = "prompt"
    ULTIMATE = "ultimate"


class BackendKind(StrEnum):
    """Interaction backend used to collect values."""

    HEADLESS = "headless"
    CLI = "cli"
    UI = "ui"


class ValueSource(StrEnum):
    """Where a resolved value came from."""

    OVERRIDE = "override"
    INTERACTIVE = "interactive"
    SHELL_COMPUTED = "shell_computed"
    STATIC_DEFAULT = "static_default"
    MISSING = "missing"


@dataclass(frozen=True)
class StaticValue:
    """Literal default value."""
    value: str


@dataclass(frozen=True)
class ShellCommand:
    """Default computed from the stdout of a shell command."""
    command: str

    def __post_init__(self) -> None:
        if not self.command.strip():
            raise ValueError("Shell command cannot be empty")


Default = Union[StaticValue, ShellCommand]


@dataclass(frozen=True)
class VariableSpec:
    """Declaration of one template variable."""
    name: str
    prompt_text: Optional[str] = None
    default: Optional[Default] = None
    required: bool = True
    options: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Variable name cannot be empty")

    @property
    def label(self) -> str:
        """Text shown to the user when asking for this variable."""
        return self.prompt_text or self.name


@dataclass(frozen=True)
class TemplateSpec:
    """A named template body with its ordered variable declarations."""
    name: str
    body: str
    variables: tuple[VariableSpec, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for variable in self.variables:
            if variable.name in seen:
                raise ValueError(
                    f"Duplicate variable '{variable.name}' in template '{self.name}'"
                )
            seen.add(variable.name)

    def variable_names(self) -> list[str]:
        return [v.name for v in self.variables]


@dataclass(frozen=True)
class Config:
    """Immutable set of templates keyed by name, in declaration order."""
    templates: tuple[TemplateSpec, ...] = ()

    def __post_init__(self) -> None:
        names = [t.name for t in self.templates]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate template names: {', '.join(duplicates)}")

    def names(self) -> list[str]:
        return [t.name for t in self.templates]

    def lookup(self, name: str) -> TemplateSpec | None:
        for template in self.templates:
            if template.name == name:
                return template
        return None

    def __len__(self) -> int:
        return len(self.templates)


@dataclass(frozen=True)
class ResolvedValue:
    """Final value of one variable for a single render."""
    name: str
    value: str
    source: ValueSource

    @property
    def is_missing(self) -> bool:
        return self.source == ValueSource.MISSING


@dataclass(frozen=True)
class RenderRequest:
    """Everything a single render needs.

    Privilege and trust travel on the request instead of being read from
    process-wide state, so the resolver can be driven directly from tests.
    """
    config: Config
    template_name: Optional[str] = None
    overrides: Mapping[str, str] = field(default_factory=dict)
    trust_mode: TrustMode = TrustMode.NONE
    backend: BackendKind = BackendKind.HEADLESS
    loose: bool = False
    privilege: Privilege = Privilege.NORMAL
    shell_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))
        timeout = self.shell_timeout
        if timeout is not None and not (math.isfinite(timeout) and timeout > 0):
            raise ValueError(f"shell_timeout must be a positive number of seconds, got {timeout!r}")
