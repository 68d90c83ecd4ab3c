"""Exception hierarchy for the render pipeline."""

from __future__ import annotations

from enum import StrEnum
from typing import Sequence


class Stage(StrEnum):
    """Pipeline stage that produced an error."""

    PRIVILEGE = "privilege"
    CONFIGURATION = "configuration"
    SELECTION = "selection"
    RESOLUTION = "resolution"
    RENDER = "render"


class RenderError(Exception):
    """Base exception for render failures.

    Every subclass is fatal: the pipeline stops at the first one and no
    partial output is produced.
    """

    stage: Stage = Stage.RENDER

    def __init__(self, message: str, stage: Stage | None = None):
        if stage is not None:
            self.stage = stage
        super().__init__(message)


class PrivilegeDenied(RenderError):
    """Requested backend/override/trust combination is not permitted."""

    stage = Stage.PRIVILEGE


class ConfigurationEmpty(RenderError):
    """Configuration declares no templates."""

    stage = Stage.CONFIGURATION

    def __init__(self) -> None:
        super().__init__("Configuration does not declare any templates.")


class NoTemplateSelected(RenderError):
    """Template selection is ambiguous and the backend cannot ask."""

    stage = Stage.SELECTION

    def __init__(self, candidates: Sequence[str]):
        self.candidates = list(candidates)
        super().__init__(
            f"No template selected and {len(self.candidates)} candidates exist "
            f"({', '.join(self.candidates)}). Use --template to pick one."
        )


class TemplateNotFound(RenderError):
    """Explicitly requested template is not declared in the configuration."""

    stage = Stage.SELECTION

    def __init__(self, name: str, candidates: Sequence[str]):
        self.name = name
        self.candidates = list(candidates)
        super().__init__(
            f"Template '{name}' not found. Available: {', '.join(self.candidates)}"
        )


class MissingRequiredVariables(RenderError):
    """Strict mode found required variables without a value."""

    stage = Stage.RESOLUTION

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing value for required variable(s): {', '.join(self.missing)}. "
            f"Provide them or use --loose to render with empty values."
        )


class RenderCancelled(RenderError):
    """User aborted an interactive backend.

    Callers usually report this as a cancellation rather than a failure.
    """

    def __init__(self, message: str = "Render cancelled by user."):
        super().__init__(message)
