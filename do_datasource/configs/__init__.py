"""
Configuration Module

Client configuration types and loading utilities.
"""

from .types import (
    ClientConfig,
    DataSourceConfig,
    DEFAULT_API_ENDPOINT,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)

from .loader import load_config, token_from_env

__all__ = [
    "ClientConfig",
    "DataSourceConfig",
    "DEFAULT_API_ENDPOINT",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_USER_AGENT",
    "load_config",
    "token_from_env",
]
