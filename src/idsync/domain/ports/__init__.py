"""Domain port definitions for adapters."""

from __future__ import annotations

from .authority import (
    AuthorityNotFoundError,
    AuthorityRequestError,
    IdentityAuthorityClient,
    WireClaim,
    WireEntity,
    WireOidcConfig,
    WireRequest,
)

__all__ = [
    "AuthorityNotFoundError",
    "AuthorityRequestError",
    "IdentityAuthorityClient",
    "WireClaim",
    "WireEntity",
    "WireOidcConfig",
    "WireRequest",
]
