"""Shared fixtures for Doppler adapter tests."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

import httpx
import pytest

from idsync.adapters.doppler import DopplerIdentityClient
from idsync.adapters.http_resilience import ResilientClient
from idsync.config import DopplerConfig, RetryPolicy
from tests.helpers.doppler import API_HOST, RecordingHandler

if TYPE_CHECKING:
    from idsync.config import ResilienceConfig


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def doppler_config() -> DopplerConfig:
    return DopplerConfig(token="dp.sa.test", api_host=API_HOST)  # noqa: S106


@pytest.fixture
def doppler_client(
    doppler_config: DopplerConfig, handler: RecordingHandler
) -> DopplerIdentityClient:
    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(
            replace(resilience, retry=RetryPolicy(total=0), ratelimit=None),
            transport=httpx.MockTransport(handler),
        )

    return DopplerIdentityClient(config=doppler_config, client_factory=factory)
