"""Process-wide configuration, reachable from anywhere through a context var.

The config is loaded once at import from ``APP_CONFIG_FILE``. Tests and tools
swap parts of it for a block of code with ``with_context``.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from src.advocates.runtime.config.config_data import ConfigData
from src.advocates.runtime.config.config_template import load_config
from src.advocates.runtime.config.settings import EnvironmentVariables


@dataclass(frozen=True)
class AppContext:
    """Configuration plus the environment it was loaded from."""

    config: ConfigData
    env: EnvironmentVariables


_env = EnvironmentVariables()
_app_context: ContextVar[AppContext] = ContextVar(
    "app_context",
    default=AppContext(config=load_config(Path(_env.config_file)), env=_env),
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    return _app_context.set(context)


def get_config() -> ConfigData:
    """Shortcut for ``get_context().config``."""
    return get_context().config


def set_config(config: ConfigData) -> None:
    """Replace the whole configuration for the current context."""
    set_context(replace(get_context(), config=config))


def _field_values(model: BaseModel, explicit_only: bool) -> dict[str, Any]:
    """Declared (not computed) fields of ``model`` as nested dicts.

    With ``explicit_only`` a field is kept only if it, or something below it,
    was passed to the constructor.
    """
    values: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _field_values(value, explicit_only)
            if nested or not explicit_only:
                values[name] = nested
        elif not explicit_only or name in model.model_fields_set:
            values[name] = value
    return values


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(base: ConfigData, override: ConfigData) -> ConfigData:
    """Apply the explicitly set parts of ``override`` on top of ``base``."""
    merged = _deep_merge(
        _field_values(base, explicit_only=False),
        _field_values(override, explicit_only=True),
    )
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None) -> Iterator[None]:
    """Run a block with part of the configuration replaced.

    Example:
        with with_context(ConfigData(app=AppConfig(environment="production"))):
            assert get_config().app.environment == "production"
    """
    if config_override is None:
        yield
        return
    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData or None, got {type(config_override)}"
        )

    current = get_context()
    token = set_context(
        replace(current, config=merge_config(current.config, config_override))
    )
    try:
        yield
    finally:
        _app_context.reset(token)
