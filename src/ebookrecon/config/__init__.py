"""Application configuration helpers."""

from __future__ import annotations

from .env import read_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .outputs import OutputPaths
from .reconcile import (
    DEFAULT_PLATFORM_URL,
    DEFAULT_PROXY_PREFIX,
    ReconcileConfig,
    get_reconcile_config,
)

__all__ = [
    "DEFAULT_PLATFORM_URL",
    "DEFAULT_PROXY_PREFIX",
    "ConfigurationError",
    "MissingConfigurationError",
    "OutputPaths",
    "ReconcileConfig",
    "configure_logging",
    "get_reconcile_config",
    "read_env_var",
]
