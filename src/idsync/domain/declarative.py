"""Convert identities to and from their declarative document form.

The document mirrors the resource schema a configuration front end hands us::

    {
        "service_account_slug": "...",
        "slug": "...",                      # computed, optional on input
        "name": "...",
        "ttl_seconds": 600,
        "config_oidc": [
            {
                "discovery_url": "...",
                "claims_type": "exact",     # optional
                "claims": [{"key": "aud", "values": ["..."]}, ...],
            }
        ],
    }

Front ends represent sets as lists, so ``claims`` and each ``values`` list
arrive in arbitrary order. They are canonicalized immediately.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import singledispatch
from typing import Any

from idsync.domain.claims import from_canonical, to_canonical
from idsync.domain.errors import InvalidIdentityError, UnsupportedMethodError
from idsync.domain.model import ClaimRule, ClaimsType, IdentityConfig, OidcConfig

type Declaration = dict[str, Any]


def identity_from_declaration(data: Mapping[str, Any]) -> IdentityConfig:
    oidc_blocks = _require(data, "config_oidc", Sequence)
    if isinstance(oidc_blocks, str) or len(oidc_blocks) != 1:
        raise InvalidIdentityError(
            "Exactly one config_oidc block is required", field="config_oidc"
        )
    oidc_block = oidc_blocks[0]
    if not isinstance(oidc_block, Mapping):
        raise InvalidIdentityError("config_oidc block must be a mapping", field="config_oidc")

    ttl_seconds = _require(data, "ttl_seconds", int)
    if isinstance(ttl_seconds, bool):
        raise InvalidIdentityError("ttl_seconds must be an integer", field="ttl_seconds")

    return IdentityConfig(
        slug=_optional_str(data, "slug") or "",
        parent_slug=_require(data, "service_account_slug", str),
        name=_require(data, "name", str),
        ttl_seconds=ttl_seconds,
        method_config=_oidc_from_block(oidc_block),
    )


def identity_to_declaration(identity: IdentityConfig) -> Declaration:
    declaration: Declaration = {
        "service_account_slug": identity.parent_slug,
        "slug": identity.slug,
        "name": identity.name,
        "ttl_seconds": identity.ttl_seconds,
    }
    declaration.update(_method_block(identity.method_config))
    return declaration


def _oidc_from_block(block: Mapping[str, Any]) -> OidcConfig:
    claims_type_raw = _optional_str(block, "claims_type", prefix="config_oidc")
    try:
        claims_type = ClaimsType(claims_type_raw) if claims_type_raw else ClaimsType.EXACT
    except ValueError:
        raise InvalidIdentityError(
            f"Unknown claims_type: {claims_type_raw!r}", field="config_oidc.claims_type"
        ) from None

    raw_claims = _require(block, "claims", Sequence, prefix="config_oidc")
    return OidcConfig(
        discovery_url=_require(block, "discovery_url", str, prefix="config_oidc"),
        claims_type=claims_type,
        claims=to_canonical(_claim_rule(entry) for entry in raw_claims),
    )


def _claim_rule(entry: object) -> ClaimRule:
    if not isinstance(entry, Mapping):
        raise InvalidIdentityError(
            "Each claim must be a mapping with key and values", field="config_oidc.claims"
        )
    key = _require(entry, "key", str, prefix="config_oidc.claims")
    values = _require(entry, "values", Sequence, prefix=f"config_oidc.claims.{key}")
    if isinstance(values, str) or not all(isinstance(value, str) for value in values):
        raise InvalidIdentityError(
            "Claim values must be a list of strings", field=f"config_oidc.claims.{key}.values"
        )
    return ClaimRule(key=key, values=tuple(values))


@singledispatch
def _method_block(config: object) -> Declaration:
    raise UnsupportedMethodError(getattr(config, "METHOD", type(config).__name__))


@_method_block.register
def _(config: OidcConfig) -> Declaration:
    return {
        "config_oidc": [
            {
                "discovery_url": config.discovery_url,
                "claims_type": str(config.claims_type),
                "claims": [
                    {"key": rule.key, "values": list(rule.values)}
                    for rule in from_canonical(config.claims)
                ],
            }
        ]
    }


def _require[T](data: Mapping[str, Any], name: str, kind: type[T], *, prefix: str = "") -> T:
    field_name = f"{prefix}.{name}" if prefix else name
    if name not in data or data[name] is None:
        raise InvalidIdentityError(f"Missing required field: {field_name}", field=field_name)
    value = data[name]
    if not isinstance(value, kind):
        raise InvalidIdentityError(
            f"Field {field_name} must be of type {kind.__name__}", field=field_name
        )
    return value


def _optional_str(data: Mapping[str, Any], name: str, *, prefix: str = "") -> str | None:
    value = data.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        field_name = f"{prefix}.{name}" if prefix else name
        raise InvalidIdentityError(f"Field {field_name} must be a string", field=field_name)
    return value


__all__ = ["Declaration", "identity_from_declaration", "identity_to_declaration"]
