"""Shared pytest configuration for the advocates test suite."""

import os
from pathlib import Path

# Configuration is read once on first import of src.advocates.runtime.context
os.environ.setdefault(
    "APP_CONFIG_FILE", str(Path(__file__).parent / "config.test.yaml")
)
os.environ.setdefault("APP_ENVIRONMENT", "test")

pytest_plugins = ["tests.fixtures.core", "tests.fixtures.client"]
