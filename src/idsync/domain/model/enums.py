"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class AuthMethod(StrEnum):
    """Discriminator for the identity's authentication method variant."""

    OIDC = "oidc"


class ClaimsType(StrEnum):
    EXACT = "exact"
    WILDCARD = "wildcard"


class WriteOperation(StrEnum):
    CREATE = "create"
    UPDATE = "update"
