"""
Environment configuration for the transaction tooling.
"""

from .env import Config, EnvConfig, get_env_path

__all__ = ("Config", "EnvConfig", "get_env_path")
