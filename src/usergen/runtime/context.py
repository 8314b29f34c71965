from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace

from loguru import logger
from pydantic import BaseModel

from usergen.runtime.config.config_data import ConfigData
from usergen.runtime.config.config_template import load_templated_yaml
from usergen.runtime.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_default_config(env: EnvironmentVariables | None = None) -> ConfigData:
    """Build the startup configuration from config.yaml and the environment.

    Falls back to the model defaults when the YAML file is absent.
    """
    env = env or EnvironmentVariables()

    if env.config_path.exists():
        config = load_templated_yaml(env.config_path, env.environment)
    else:
        logger.debug(f"No configuration file at {env.config_path}; using defaults")
        config = ConfigData()

    config.app.environment = env.environment
    if env.log_level:
        config.logging.level = env.log_level.upper()
    return config


_default_context: AppContext | None = None

_app_context: ContextVar[AppContext | None] = ContextVar(
    "app_context", default=None
)


def _get_default_context() -> AppContext:
    """Load the startup configuration on first use."""
    global _default_context
    if _default_context is None:
        _default_context = AppContext(config=load_default_config())
    return _default_context


def get_context() -> AppContext:
    """Get the current application context.

    The default context is built lazily, so a broken configuration surfaces
    at the first ``get_config()`` call rather than at import.

    Returns:
        AppContext: The current application context containing configuration.
    """
    return _app_context.get() or _get_default_context()


def set_context(context: AppContext) -> Token[AppContext | None]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _recursive_model_dump_exclude_unset(model: BaseModel) -> dict:
    """Recursively dump a Pydantic model keeping only explicitly set fields.

    A nested model is included in full as soon as any of its own fields was set,
    so the parent merge sees the override.
    """
    result = {}
    explicitly_set_fields = model.model_fields_set

    for field_name in model.__class__.model_fields:
        field_value = getattr(model, field_name)

        if isinstance(field_value, BaseModel):
            nested_result = _recursive_model_dump_exclude_unset(field_value)
            if nested_result:
                result[field_name] = nested_result
            elif field_name in explicitly_set_fields:
                result[field_name] = field_value.model_dump()
        elif field_name in explicitly_set_fields:
            result[field_name] = field_value

    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    """Recursively merge two dictionaries, override values win."""
    result = base_dict.copy()

    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value

    return result


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge the explicitly set fields of ``override_config`` into ``base_config``."""
    base_dict = base_config.model_dump(exclude={"database": {"is_sqlite", "connection_string"}})
    override_dict = _recursive_model_dump_exclude_unset(override_config)
    merged_dict = _recursive_dict_merge(base_dict, override_dict)
    return ConfigData.model_validate(merged_dict)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Context manager for temporarily overriding the application context.

    Only fields explicitly set on ``config_override`` replace the current
    values; everything else is inherited.

    Example:
        override = ConfigData(database=DatabaseConfig(url="sqlite://"))
        with with_context(override):
            assert get_config().database.url == "sqlite://"
            # generator, logging, ... inherited from the outer context
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration.

    Returns:
        ConfigData: The current configuration from the app context.
    """
    return get_context().config
