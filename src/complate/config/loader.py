"""Load ``.complate/config.yaml`` into the immutable render Config."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from complate.render.models import (
    Config,
    ShellCommand,
    StaticValue,
    TemplateSpec,
    VariableSpec,
)
from complate.render.renderer import placeholder_names

from .schema import ConfigSchema, TemplateSchema, ValueSchema

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(".complate") / "config.yaml"
CONFIG_ENV_VAR = "COMPLATE_CONFIG"
SHELL_TIMEOUT_ENV_VAR = "COMPLATE_SHELL_TIMEOUT"

DEFAULT_CONFIG_YAML = """\
version: "0.1"
templates:
  default:
    content:
      inline: |-
        {{ summary }}

        {{ body }}

        Signed-off-by: {{ author }}
    values:
      summary:
        prompt: "Summary"
      body:
        prompt: "Description"
        required: false
      author:
        prompt: "Author"
        shell: "git config user.name"
"""


class ConfigError(RuntimeError):
    """Raised when the configuration file is missing or invalid."""


def resolve_config_path(cli_path: str | os.PathLike[str] | None = None) -> Path:
    """Return the config path (CLI flag, then COMPLATE_CONFIG, then default)."""
    if cli_path:
        return Path(cli_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def shell_timeout_from_env() -> float | None:
    """Shell default timeout from COMPLATE_SHELL_TIMEOUT, or None."""
    raw = os.environ.get(SHELL_TIMEOUT_ENV_VAR)
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{SHELL_TIMEOUT_ENV_VAR} must be a number of seconds, got '{raw}'") from exc
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"{SHELL_TIMEOUT_ENV_VAR} must be positive, got '{raw}'")
    return timeout


def _format_validation_error(exc: ValidationError) -> str:
    lines = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        lines.append(f"  {location}: {error['msg']}")
    return "\n".join(lines)


def _build_variable(name: str, value: ValueSchema) -> VariableSpec:
    default: StaticValue | ShellCommand | None = None
    if value.shell is not None:
        default = ShellCommand(value.shell)
    elif value.static is not None:
        default = StaticValue(value.static)
    return VariableSpec(
        name=name,
        prompt_text=value.prompt,
        default=default,
        required=value.required,
        options=tuple(value.options),
    )


def _read_body(name: str, template: TemplateSchema, base_dir: Path) -> str:
    if template.content.inline is not None:
        return template.content.inline

    body_path = Path(template.content.file or "")
    if not body_path.is_absolute():
        body_path = base_dir / body_path
    try:
        return body_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Template '{name}': cannot read content file {body_path}: {exc}") from exc


def build_config(data: Any, base_dir: Path | None = None) -> Config:
    """Validate parsed YAML data and convert it to a Config.

    Args:
        data: Mapping as produced by the YAML loader.
        base_dir: Directory used to resolve relative ``content.file`` paths.

    Raises:
        ConfigError: If the data does not match the schema.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    try:
        schema = ConfigSchema.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration:\n{_format_validation_error(exc)}") from exc

    base_dir = base_dir or Path.cwd()
    templates = []
    for name, template in schema.templates.items():
        variables = tuple(_build_variable(var_name, value) for var_name, value in template.values.items())
        body = _read_body(name, template, base_dir)
        spec = TemplateSpec(name=name, body=body, variables=variables)

        undeclared = [n for n in placeholder_names(body) if n not in spec.variable_names()]
        if undeclared:
            logger.debug("Template %s has undeclared placeholders: %s", name, ", ".join(undeclared))
        templates.append(spec)

    return Config(templates=tuple(templates))


def load_config(path: Path) -> Config:
    """Read and validate the YAML configuration at ``path``.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if not path.exists():
        raise ConfigError(
            f"Configuration file not found: {path}. Run 'complate init' to create one."
        )

    yaml = YAML(typ="safe")
    try:
        with path.open(encoding="utf-8") as handle:
            data = yaml.load(handle)
    except (OSError, YAMLError) as exc:
        raise ConfigError(f"Cannot parse configuration {path}: {exc}") from exc

    config = build_config(data, base_dir=path.resolve().parent)
    logger.debug("Loaded %d template(s) from %s", len(config), path)
    return config


def write_default_config(path: Path = DEFAULT_CONFIG_PATH, force: bool = False) -> Path:
    """Write the starter configuration to ``path``.

    Raises:
        ConfigError: If ``path`` exists and ``force`` is False.
    """
    if path.exists() and not force:
        raise ConfigError(f"{path} already exists. Use --force to overwrite.")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
    return path
