"""Port for the remote identity authority.

Implementations own transport, authentication and retry policy. They raise
``AuthorityRequestError`` on failure and ``AuthorityNotFoundError`` when the
requested identity does not exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class WireClaim:
    key: str
    values: tuple[str, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class WireOidcConfig:
    discovery_url: str
    claims: tuple[WireClaim, ...]
    # None means the authority applies its default ("exact")
    claims_type: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class WireRequest:
    """Body sent to the authority on create and update."""

    name: str
    ttl_seconds: int
    method: str
    config_oidc: WireOidcConfig | None = None
    slug: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class WireEntity:
    """Identity as returned by the authority. The parent slug is not echoed."""

    slug: str
    name: str
    ttl_seconds: int
    method: str
    config_oidc: WireOidcConfig | None = None


class AuthorityRequestError(RuntimeError):
    """Raised by authority clients when a request fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return False


class AuthorityNotFoundError(AuthorityRequestError):
    """Raised when the authority reports the identity as absent."""

    def __init__(self, message: str = "Identity not found", *, status_code: int | None = 404) -> None:
        super().__init__(message, status_code=status_code)

    @property
    def is_not_found(self) -> bool:
        return True


@runtime_checkable
class IdentityAuthorityClient(Protocol):
    """Single-round-trip CRUD operations against the identity authority."""

    def create(self, parent_slug: str, request: WireRequest) -> WireEntity: ...

    def read(self, parent_slug: str, slug: str) -> WireEntity: ...

    def update(self, parent_slug: str, request: WireRequest) -> WireEntity: ...

    def delete(self, parent_slug: str, slug: str) -> None: ...


__all__ = [
    "AuthorityNotFoundError",
    "AuthorityRequestError",
    "IdentityAuthorityClient",
    "WireClaim",
    "WireEntity",
    "WireOidcConfig",
    "WireRequest",
]
