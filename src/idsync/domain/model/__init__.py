"""Public domain model surface."""

from __future__ import annotations

from idsync.domain.model.enums import AuthMethod, ClaimsType, WriteOperation
from idsync.domain.model.identity import (
    REQUIRED_CLAIM_KEYS,
    CanonicalClaims,
    ClaimRule,
    IdentityConfig,
    MethodConfig,
    OidcConfig,
)

__all__ = [  # noqa: RUF022
    # identity
    "IdentityConfig",
    "MethodConfig",
    "OidcConfig",
    "ClaimRule",
    "CanonicalClaims",
    "REQUIRED_CLAIM_KEYS",
    # enums
    "AuthMethod",
    "ClaimsType",
    "WriteOperation",
]
