"""Variable resolution and rendering core for complate."""

from .models import (
    BackendKind,
    Config,
    Privilege,
    RenderRequest,
    ResolvedValue,
    ShellCommand,
    StaticValue,
    TemplateSpec,
    TrustMode,
    ValueSource,
    VariableSpec,
)
from .exceptions import (
    ConfigurationEmpty,
    MissingRequiredVariables,
    NoTemplateSelected,
    PrivilegeDenied,
    RenderCancelled,
    RenderError,
    Stage,
    TemplateNotFound,
)
from .privilege import check_privileges
from .trust import Decision, ShellTrustGate, run_shell_command
from .backends import (
    Backend,
    FullScreenBackend,
    HeadlessBackend,
    LinePromptBackend,
    create_backend,
)
from .resolver import VariableResolver, enforce_completeness
from .renderer import render
from .pipeline import render_request, select_template

__all__ = [
    "BackendKind",
    "Config",
    "Privilege",
    "RenderRequest",
    "ResolvedValue",
    "ShellCommand",
    "StaticValue",
    "TemplateSpec",
    "TrustMode",
    "ValueSource",
    "VariableSpec",
    "ConfigurationEmpty",
    "MissingRequiredVariables",
    "NoTemplateSelected",
    "PrivilegeDenied",
    "RenderCancelled",
    "RenderError",
    "Stage",
    "TemplateNotFound",
    "check_privileges",
    "Decision",
    "ShellTrustGate",
    "run_shell_command",
    "Backend",
    "FullScreenBackend",
    "HeadlessBackend",
    "LinePromptBackend",
    "create_backend",
    "VariableResolver",
    "enforce_completeness",
    "render",
    "render_request",
    "select_template",
]
