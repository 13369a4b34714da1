from __future__ import annotations

import asyncio

import httpx

from idsync.adapters.http_resilience import ResilientClient, build_retry
from idsync.config import RateLimit, ResilienceConfig, RetryPolicy


def test_retry_policy_never_retries_post() -> None:
    policy = RetryPolicy()

    assert "POST" not in policy.allowed_methods
    assert "PATCH" in policy.allowed_methods
    assert build_retry(policy).total == policy.total


def test_client_sends_default_headers_and_base_url() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    config = ResilienceConfig(
        name="test",
        base_url="https://api.example.test",
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        default_headers={"Authorization": "Bearer token"},
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return await client.get("/v1/ping")

    response = asyncio.run(run())

    assert response.json() == {"ok": True}
    assert str(seen[0].url) == "https://api.example.test/v1/ping"
    assert seen[0].headers["Authorization"] == "Bearer token"
