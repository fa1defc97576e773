"""Load config.yaml with ``${VAR}`` placeholders resolved from the environment.

Placeholder forms:

- ``${NAME}``: required, a missing variable is an error
- ``${NAME:-fallback}``: optional, ``fallback`` when unset
- ``${NAME:?hint}``: required, ``hint`` is added to the error

Before substitution, variables prefixed with the upper-cased environment name
(``PRODUCTION_DATABASE_URL`` while ``APP_ENVIRONMENT=production``) are copied
to their unprefixed name, so one file serves every environment.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.advocates.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def _resolve(expression: str) -> str:
    if ":-" in expression:
        name, fallback = expression.split(":-", 1)
        return os.getenv(name, fallback)

    name, _, hint = expression.partition(":?")
    value = os.getenv(name)
    if value is None:
        if hint:
            raise ValueError(f"Required environment variable {name}: {hint}")
        raise ValueError(f"Required environment variable {name} not set")
    return value


def substitute_env_vars(text: str) -> str:
    """Replace every ``${...}`` placeholder in ``text``."""
    return _PLACEHOLDER.sub(lambda match: _resolve(match.group(1)), text)


def promote_environment_overrides(environment: str) -> list[str]:
    """Copy ``<ENVIRONMENT>_NAME`` variables to ``NAME``; return the names set."""
    prefix = f"{environment.upper()}_"
    promoted = []
    for name, value in list(os.environ.items()):
        if name.startswith(prefix) and len(name) > len(prefix):
            os.environ[name[len(prefix):]] = value
            promoted.append(name[len(prefix):])
    return promoted


def _parse_yaml(text: str) -> dict[str, Any]:
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not loaded:
        raise ValueError("Failed to parse YAML: the file is empty")
    return loaded


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Read ``file_path`` and validate its ``config:`` section.

    Raises:
        ValueError: a required variable is missing, or the YAML or its
            values are invalid
        FileNotFoundError: ``file_path`` does not exist
    """
    environment = os.getenv("APP_ENVIRONMENT", "development")
    promoted = promote_environment_overrides(environment)
    logger.debug(
        "Loading configuration from {} for {} ({} overrides)",
        file_path,
        environment,
        len(promoted),
    )

    loaded = _parse_yaml(substitute_env_vars(Path(file_path).read_text()))
    try:
        return ConfigData.model_validate(loaded.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def load_config(file_path: Path) -> ConfigData:
    """Like ``load_templated_yaml`` but a missing file means built-in defaults."""
    if not file_path.exists():
        logger.warning("Config file {} not found; using default configuration", file_path)
        return ConfigData()
    return load_templated_yaml(file_path)
