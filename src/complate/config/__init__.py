"""Configuration file loading for complate."""

from .loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    ConfigError,
    build_config,
    load_config,
    resolve_config_path,
    shell_timeout_from_env,
    write_default_config,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "build_config",
    "load_config",
    "resolve_config_path",
    "shell_timeout_from_env",
    "write_default_config",
]
