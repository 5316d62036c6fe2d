"""
A module for exposing user-level defaults for the transaction tooling.

The configuration is read from an `env.yaml` file and validated with Pydantic. The file
location is taken from the `ETHEREUM_TX_ENV_PATH` environment variable, falling back to
`~/.ethereum_tx/env.yaml`. A missing file is not an error: all values have defaults.

Classes:
- Config: Represents the configuration structure with validation.
- EnvConfig: Loads the configuration file and exposes it as Python objects.

Usage:
- Initialize an instance of EnvConfig to load the configuration.
- Access configuration values via attributes (e.g., EnvConfig().chain_id).
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ethereum_tx_logging import get_logger, parse_log_level

ENV_PATH_VARIABLE = "ETHEREUM_TX_ENV_PATH"
DEFAULT_ENV_PATH = Path("~/.ethereum_tx/env.yaml")

logger = get_logger(__name__)


def get_env_path() -> Path:
    """Return the path of the configuration file."""
    return Path(os.environ.get(ENV_PATH_VARIABLE, DEFAULT_ENV_PATH)).expanduser()


class Config(BaseModel):
    """
    Represents the overall environment configuration.

    Attributes:
    - chain_id (int): Chain id used when a command is not given one explicitly.
    - log_level (str): Log level of the command line, as accepted by `--log-level`.

    """

    chain_id: int = 1
    log_level: str = "INFO"

    model_config = ConfigDict(extra="forbid")

    @field_validator("chain_id")
    @classmethod
    def validate_chain_id(cls, chain_id: int) -> int:
        """Chain ids are unsigned."""
        if chain_id < 0:
            raise ValueError(f"chain id must not be negative: {chain_id}")
        return chain_id

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, log_level: str) -> str:
        """Reject log levels the logging configuration would not accept."""
        parse_log_level(log_level)
        return log_level


class EnvConfig(Config):
    """
    Loads and validates environment configuration from `env.yaml`.

    This is a wrapper class for the Config model. It reads a config file
    from disk into a Config model and then exposes it.
    """

    def __init__(self, env_path: Path | None = None):
        """Init for the EnvConfig class."""
        if env_path is None:
            env_path = get_env_path()
        if not env_path.exists():
            logger.debug(f"No configuration file at {env_path}, using defaults")
            super().__init__()
            return

        with env_path.open("r") as file:
            try:
                config_data = yaml.safe_load(file) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid configuration: {e}") from e
        if not isinstance(config_data, dict):
            raise ValueError(f"Invalid configuration: {env_path} must contain a mapping")
        try:
            super().__init__(**config_data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}") from e
        logger.debug(f"Loaded configuration from {env_path}")
