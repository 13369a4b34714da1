"""Application configuration helpers."""

from __future__ import annotations

from .doppler import DEFAULT_DOPPLER_API_HOST, DopplerConfig, get_doppler_config
from .env import env_flag, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "DEFAULT_DOPPLER_API_HOST",
    "ConfigurationError",
    "DopplerConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "env_flag",
    "get_doppler_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
