"""Doppler API configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_flag, optional_env_var, require_env_var
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_DOPPLER_API_HOST = "https://api.doppler.com"
_DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class DopplerConfig:
    token: str = field(repr=False)
    api_host: str = DEFAULT_DOPPLER_API_HOST
    verify_tls: bool = True
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS

    @property
    def resilience(self) -> ResilienceConfig:
        return ResilienceConfig(
            name="doppler",
            base_url=self.api_host.rstrip("/"),
            timeout_seconds=self.timeout_seconds,
            verify_tls=self.verify_tls,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/json",
            },
        )


def get_doppler_config() -> DopplerConfig:
    return DopplerConfig(
        token=require_env_var("DOPPLER_TOKEN"),
        api_host=optional_env_var("DOPPLER_API_HOST", DEFAULT_DOPPLER_API_HOST),
        verify_tls=env_flag("DOPPLER_VERIFY_TLS", default=True),
    )
