"""HTTP client for Doppler service-account identities."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from idsync.adapters.http_resilience import ResilientClient
from idsync.config.doppler import get_doppler_config
from idsync.domain.ports.authority import AuthorityRequestError, IdentityAuthorityClient

from .schema import ErrorResponse, IdentityResponse
from .translator import translate_identity, translate_request

if TYPE_CHECKING:
    from collections.abc import Callable

    from idsync.config.doppler import DopplerConfig
    from idsync.config.http_resilience import ResilienceConfig
    from idsync.domain.ports.authority import WireEntity, WireRequest

log = getLogger(__name__)

_SERVICE_ACCOUNT_PATH = "/v3/workplace/service_accounts/service_account/{parent}"


class DopplerAPIError(AuthorityRequestError):
    """Raised when the Doppler API rejects a request or cannot be reached."""

    @property
    def is_not_found(self) -> bool:
        return self.status_code == httpx.codes.NOT_FOUND


class DopplerIdentityClient:
    """Synchronous facade over the async Doppler identity endpoints."""

    def __init__(
        self,
        *,
        config: DopplerConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def create(self, parent_slug: str, request: WireRequest) -> WireEntity:
        payload = translate_request(request).model_dump(mode="json", exclude_none=True)
        return asyncio.run(self._identity_request("POST", _identities_path(parent_slug), payload))

    def read(self, parent_slug: str, slug: str) -> WireEntity:
        return asyncio.run(self._identity_request("GET", _identity_path(parent_slug, slug)))

    def update(self, parent_slug: str, request: WireRequest) -> WireEntity:
        if not request.slug:
            raise DopplerAPIError("Update request is missing the identity slug")
        payload = translate_request(request).model_dump(mode="json", exclude_none=True)
        return asyncio.run(
            self._identity_request("PATCH", _identity_path(parent_slug, request.slug), payload)
        )

    def delete(self, parent_slug: str, slug: str) -> None:
        asyncio.run(self._perform_request("DELETE", _identity_path(parent_slug, slug)))

    async def _identity_request(
        self,
        method: str,
        path: str,
        payload: dict[str, object] | None = None,
    ) -> WireEntity:
        response = await self._perform_request(method, path, payload)
        try:
            body = IdentityResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise DopplerAPIError(
                f"Unexpected Doppler response payload for {method} {path}",
                status_code=response.status_code,
            ) from exc
        return translate_identity(body.identity)

    async def _perform_request(
        self,
        method: str,
        path: str,
        payload: dict[str, object] | None = None,
    ) -> httpx.Response:
        async with self._client_factory(self._resilience) as client:
            try:
                if payload is None:
                    response = await client.request(method, path)
                else:
                    response = await client.request(method, path, json=payload)
            except httpx.HTTPError as exc:
                raise DopplerAPIError(f"Doppler request {method} {path} failed: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            log.error(f"Doppler API error {response.status_code} on {method} {path}: {message}")
            raise DopplerAPIError(message, status_code=response.status_code)
        return response


def build_doppler_client(config: DopplerConfig | None = None) -> DopplerIdentityClient:
    return DopplerIdentityClient(config=config or get_doppler_config())


def _identities_path(parent_slug: str) -> str:
    return f"{_SERVICE_ACCOUNT_PATH.format(parent=quote(parent_slug, safe=''))}/identities"


def _identity_path(parent_slug: str, slug: str) -> str:
    return f"{_identities_path(parent_slug)}/identity/{quote(slug, safe='')}"


def _error_message(response: httpx.Response) -> str:
    try:
        error = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return response.reason_phrase or f"HTTP {response.status_code}"
    if error.messages:
        return "; ".join(error.messages)
    return response.reason_phrase or f"HTTP {response.status_code}"


if TYPE_CHECKING:
    _client_check: IdentityAuthorityClient = DopplerIdentityClient(config=get_doppler_config())
