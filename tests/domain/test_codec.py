from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar

import pytest

from idsync.domain.codec import decode, encode
from idsync.domain.drift import equivalent
from idsync.domain.errors import (
    DuplicateClaimKeyError,
    MalformedEntityError,
    MissingSlugError,
    UnknownAuthMethodError,
    UnsupportedMethodError,
)
from idsync.domain.model import ClaimsType, IdentityConfig, WriteOperation
from idsync.domain.ports.authority import WireClaim, WireEntity, WireOidcConfig
from tests.helpers.identities import GITHUB_DISCOVERY_URL, make_identity


@dataclass(frozen=True, kw_only=True)
class _SharedSecretConfig:
    METHOD: ClassVar[str] = "shared_secret"

    secret_name: str


def _entity(**overrides: object) -> WireEntity:
    entity = WireEntity(
        slug="abc123",
        name="GitHub Actions OIDC",
        ttl_seconds=600,
        method="oidc",
        config_oidc=WireOidcConfig(
            discovery_url=GITHUB_DISCOVERY_URL,
            claims_type=None,
            claims=(
                WireClaim(key="sub", values=("repo:DopplerHQ/x:pull_request",)),
                WireClaim(key="aud", values=("https://github.com/DopplerHQ",)),
            ),
        ),
    )
    return replace(entity, **overrides)  # type: ignore[arg-type]


def test_encode_for_create_omits_slug() -> None:
    request = encode(make_identity(slug="stale"), operation=WriteOperation.CREATE)

    assert request.slug is None
    assert request.method == "oidc"
    assert request.name == "GitHub Actions OIDC"
    assert request.ttl_seconds == 600


def test_encode_for_update_includes_slug() -> None:
    request = encode(make_identity(slug="abc123"), operation=WriteOperation.UPDATE)

    assert request.slug == "abc123"


def test_encode_for_update_requires_slug() -> None:
    with pytest.raises(MissingSlugError):
        encode(make_identity(), operation=WriteOperation.UPDATE)


def test_encode_flattens_claims_into_list_entries() -> None:
    request = encode(make_identity(), operation=WriteOperation.CREATE)

    assert request.config_oidc is not None
    assert request.config_oidc.discovery_url == GITHUB_DISCOVERY_URL
    assert request.config_oidc.claims_type == "wildcard"
    claims = {claim.key: set(claim.values) for claim in request.config_oidc.claims}
    assert claims == {
        "aud": {"https://github.com/DopplerHQ"},
        "sub": {
            "repo:DopplerHQ/x:pull_request",
            "repo:DopplerHQ/x:ref:refs/heads/feature*",
        },
    }


def test_encode_applies_default_claims_type() -> None:
    identity = make_identity(claims_type=None)  # type: ignore[arg-type]

    request = encode(identity, operation=WriteOperation.CREATE)

    assert request.config_oidc is not None
    assert request.config_oidc.claims_type == "exact"


def test_round_trip_with_omitted_claims_type_is_equivalent() -> None:
    identity = make_identity(claims_type=None)  # type: ignore[arg-type]
    request = encode(identity, operation=WriteOperation.CREATE)
    assert request.config_oidc is not None
    entity = WireEntity(
        slug="abc123",
        name=request.name,
        ttl_seconds=request.ttl_seconds,
        method=request.method,
        config_oidc=request.config_oidc,
    )

    observed = decode(entity, parent_slug=identity.parent_slug)

    assert equivalent(identity, observed)


def test_encode_rejects_unsupported_method() -> None:
    identity = IdentityConfig(
        parent_slug="ci-bot",
        name="Legacy",
        ttl_seconds=60,
        method_config=_SharedSecretConfig(secret_name="token"),  # type: ignore[arg-type]
    )

    with pytest.raises(UnsupportedMethodError) as exc:
        encode(identity, operation=WriteOperation.CREATE)

    assert exc.value.method == "shared_secret"


def test_decode_defaults_absent_claims_type_to_exact() -> None:
    identity = decode(_entity(), parent_slug="ci-bot")

    assert identity.method_config.claims_type is ClaimsType.EXACT
    assert identity.slug == "abc123"
    assert identity.parent_slug == "ci-bot"


def test_decode_rejects_unknown_method() -> None:
    with pytest.raises(UnknownAuthMethodError, match="mystery"):
        decode(_entity(method="mystery"))


def test_decode_requires_oidc_configuration() -> None:
    with pytest.raises(MalformedEntityError) as exc:
        decode(_entity(config_oidc=None))

    assert exc.value.field == "config_oidc"


def test_decode_rejects_unknown_claims_type() -> None:
    entity = _entity()
    assert entity.config_oidc is not None
    config = replace(entity.config_oidc, claims_type="regex")

    with pytest.raises(MalformedEntityError) as exc:
        decode(replace(entity, config_oidc=config))

    assert exc.value.field == "config_oidc.claims_type"


def test_decode_rejects_duplicate_claim_keys_in_response() -> None:
    entity = _entity()
    assert entity.config_oidc is not None
    config = replace(
        entity.config_oidc,
        claims=(*entity.config_oidc.claims, WireClaim(key="aud", values=("other",))),
    )

    with pytest.raises(DuplicateClaimKeyError):
        decode(replace(entity, config_oidc=config))


def test_round_trip_is_equivalent() -> None:
    desired = make_identity()
    request = encode(desired, operation=WriteOperation.CREATE)
    entity = WireEntity(
        slug="abc123",
        name=request.name,
        ttl_seconds=request.ttl_seconds,
        method=request.method,
        config_oidc=request.config_oidc,
    )

    observed = decode(entity, parent_slug=desired.parent_slug)

    assert equivalent(desired, observed)
    assert observed.slug == "abc123"
