"""
Configuration loading.

Client settings come from an optional TOML file with a [digitalocean] table.
The API token is only ever read from the environment (a .env file is loaded
by the CLI before this runs).
"""

import os
import tomllib
from typing import Optional

from pydantic import ValidationError

from ..errors import ConfigError
from .types import DataSourceConfig


TOKEN_ENV_VARS = ("DIGITALOCEAN_TOKEN", "DIGITALOCEAN_ACCESS_TOKEN")


def load_config(config_file: Optional[str] = None) -> DataSourceConfig:
    """
    Load configuration from a TOML file, or defaults when no file is given.

    Raises:
        ConfigError: If the file is missing, not valid TOML or fails validation
    """
    if config_file is None:
        return DataSourceConfig()

    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_file}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_file}: {e}") from e

    try:
        return DataSourceConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e


def token_from_env() -> str:
    for name in TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            return token
    raise ConfigError(f"No API token found, set one of {', '.join(TOKEN_ENV_VARS)}")
