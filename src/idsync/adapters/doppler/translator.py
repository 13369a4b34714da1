"""Translate between port wire types and Doppler API payloads.

The API carries claims as a JSON object keyed by claim name; the port uses a
list of ``WireClaim`` entries.
"""

from __future__ import annotations

from idsync.domain.ports.authority import WireClaim, WireEntity, WireOidcConfig, WireRequest

from .schema import IdentityPayload, IdentityWritePayload, OidcConfigPayload


def translate_request(request: WireRequest) -> IdentityWritePayload:
    config_oidc = None
    if request.config_oidc is not None:
        config_oidc = OidcConfigPayload(
            discovery_url=request.config_oidc.discovery_url,
            claims_type=request.config_oidc.claims_type,
            claims={claim.key: list(claim.values) for claim in request.config_oidc.claims},
        )
    return IdentityWritePayload(
        name=request.name,
        ttl_seconds=request.ttl_seconds,
        method=request.method,
        config_oidc=config_oidc,
    )


def translate_identity(payload: IdentityPayload) -> WireEntity:
    config_oidc = None
    if payload.config_oidc is not None:
        config_oidc = WireOidcConfig(
            discovery_url=payload.config_oidc.discovery_url,
            claims_type=payload.config_oidc.claims_type,
            claims=tuple(
                WireClaim(key=key, values=tuple(values))
                for key, values in payload.config_oidc.claims.items()
            ),
        )
    return WireEntity(
        slug=payload.slug,
        name=payload.name,
        ttl_seconds=payload.ttl_seconds,
        method=payload.method,
        config_oidc=config_oidc,
    )
