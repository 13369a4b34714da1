"""Service-account identity model.

The method-specific configuration is a tagged union: every variant is its own
dataclass carrying a class-level ``METHOD`` tag, so an identity can never hold
stale configuration for an inactive variant.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import ClassVar

from idsync.domain.errors import InvalidIdentityError, MissingRequiredClaimError

from .enums import AuthMethod, ClaimsType

type CanonicalClaims = Mapping[str, frozenset[str]]

REQUIRED_CLAIM_KEYS = ("aud", "sub")


@dataclass(frozen=True, slots=True)
class ClaimRule:
    """One list-shaped claim entry: a key and its allowed values."""

    key: str
    values: tuple[str, ...]


@dataclass(frozen=True, kw_only=True)
class OidcConfig:
    METHOD: ClassVar[AuthMethod] = AuthMethod.OIDC

    discovery_url: str
    claims: CanonicalClaims
    claims_type: ClaimsType = ClaimsType.EXACT

    def __post_init__(self) -> None:
        # Absent claims type means exact; strings are coerced to the enum.
        object.__setattr__(self, "claims_type", _coerce_claims_type(self.claims_type))

    def validate(self) -> None:
        """Check the invariants the authority requires of an OIDC configuration."""

        if not self.discovery_url.strip():
            raise InvalidIdentityError(
                "discovery_url must not be empty", field="config_oidc.discovery_url"
            )
        for key in REQUIRED_CLAIM_KEYS:
            if key not in self.claims:
                raise MissingRequiredClaimError(key)
        for key, values in self.claims.items():
            if not values:
                raise InvalidIdentityError(
                    f"Claim {key!r} must list at least one value",
                    field=f"config_oidc.claims.{key}",
                )


def _coerce_claims_type(value: object) -> ClaimsType:
    if value is None or value == "":
        return ClaimsType.EXACT
    try:
        return ClaimsType(value)
    except ValueError:
        raise InvalidIdentityError(
            f"Unknown claims_type: {value!r}", field="config_oidc.claims_type"
        ) from None


# Add further variants here, e.g. ``type MethodConfig = OidcConfig | SecretConfig``.
type MethodConfig = OidcConfig


@dataclass(frozen=True, kw_only=True)
class IdentityConfig:
    """Desired or observed state of one service-account identity.

    ``slug`` is assigned by the authority and stays empty until creation.
    ``parent_slug`` identifies the owning service account and cannot change
    in place; moving an identity to another parent means replacing it.
    """

    parent_slug: str
    name: str
    ttl_seconds: int
    method_config: MethodConfig
    slug: str = ""

    @property
    def method(self) -> AuthMethod:
        return self.method_config.METHOD

    def with_slug(self, slug: str) -> IdentityConfig:
        return replace(self, slug=slug)

    def with_parent(self, parent_slug: str) -> IdentityConfig:
        return replace(self, parent_slug=parent_slug)

    def validate(self) -> None:
        if not self.name.strip():
            raise InvalidIdentityError("name must not be empty", field="name")
        # bool is an int subclass but never a valid TTL
        if isinstance(self.ttl_seconds, bool) or not isinstance(self.ttl_seconds, int):
            raise InvalidIdentityError("ttl_seconds must be an integer", field="ttl_seconds")
        if self.ttl_seconds < 0:
            raise InvalidIdentityError("ttl_seconds must be non-negative", field="ttl_seconds")
        self.method_config.validate()
