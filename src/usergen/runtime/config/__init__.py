"""Configuration models and loaders."""

from .config_data import (
    AppConfig,
    CliConfig,
    ConfigData,
    DatabaseConfig,
    GeneratorConfig,
    LoggingConfig,
)
from .config_template import load_templated_yaml, substitute_env_vars

__all__ = [
    "AppConfig",
    "CliConfig",
    "ConfigData",
    "DatabaseConfig",
    "GeneratorConfig",
    "LoggingConfig",
    "load_templated_yaml",
    "substitute_env_vars",
]
