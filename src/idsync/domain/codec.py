"""Translate identities to and from the authority's wire representation."""

from __future__ import annotations

from collections.abc import Callable
from functools import singledispatch

from idsync.domain.claims import from_canonical, to_canonical
from idsync.domain.errors import (
    MalformedEntityError,
    MissingSlugError,
    UnknownAuthMethodError,
    UnsupportedMethodError,
)
from idsync.domain.model import (
    AuthMethod,
    ClaimsType,
    IdentityConfig,
    MethodConfig,
    OidcConfig,
    WriteOperation,
)
from idsync.domain.ports.authority import WireClaim, WireEntity, WireOidcConfig, WireRequest

type MethodDecoder = Callable[[WireEntity], MethodConfig]


def encode(desired: IdentityConfig, *, operation: WriteOperation) -> WireRequest:
    """Build the request body for ``operation``.

    The slug is omitted on create, where the authority assigns it, and
    required on update, where it selects the identity to modify.
    """

    config_fields = _encode_method_config(desired.method_config)
    desired.validate()

    slug: str | None = None
    if operation is WriteOperation.UPDATE:
        if not desired.slug:
            raise MissingSlugError
        slug = desired.slug

    return WireRequest(
        slug=slug,
        name=desired.name,
        ttl_seconds=desired.ttl_seconds,
        method=str(desired.method),
        **config_fields,
    )


def decode(entity: WireEntity, *, parent_slug: str = "") -> IdentityConfig:
    """Rebuild an identity from an authority response.

    ``parent_slug`` is filled in by the caller since the authority does not
    return it.
    """

    try:
        method = AuthMethod(entity.method)
    except ValueError:
        raise UnknownAuthMethodError(entity.method) from None

    method_config = _DECODERS[method](entity)
    return IdentityConfig(
        slug=entity.slug,
        parent_slug=parent_slug,
        name=entity.name,
        ttl_seconds=entity.ttl_seconds,
        method_config=method_config,
    )


@singledispatch
def _encode_method_config(config: object) -> dict[str, WireOidcConfig]:
    raise UnsupportedMethodError(getattr(config, "METHOD", type(config).__name__))


@_encode_method_config.register
def _(config: OidcConfig) -> dict[str, WireOidcConfig]:
    claims = tuple(
        WireClaim(key=rule.key, values=rule.values) for rule in from_canonical(config.claims)
    )
    return {
        "config_oidc": WireOidcConfig(
            discovery_url=config.discovery_url,
            claims_type=str(config.claims_type),
            claims=claims,
        )
    }


def _decode_oidc(entity: WireEntity) -> OidcConfig:
    wire = entity.config_oidc
    if wire is None:
        raise MalformedEntityError("OIDC identity is missing its configuration", field="config_oidc")

    claims_type = ClaimsType.EXACT
    if wire.claims_type:
        try:
            claims_type = ClaimsType(wire.claims_type)
        except ValueError:
            raise MalformedEntityError(
                f"Unknown claims type: {wire.claims_type!r}", field="config_oidc.claims_type"
            ) from None

    return OidcConfig(
        discovery_url=wire.discovery_url,
        claims_type=claims_type,
        claims=to_canonical((claim.key, claim.values) for claim in wire.claims),
    )


_DECODERS: dict[AuthMethod, MethodDecoder] = {
    AuthMethod.OIDC: _decode_oidc,
}


__all__ = ["decode", "encode"]
