"""Drift detection between desired and observed identities.

Only fields under declarative control are compared. ``slug`` and
``parent_slug`` identify the object rather than describe it and are ignored.
"""

from __future__ import annotations

from functools import singledispatch

from idsync.domain.claims import claims_equal
from idsync.domain.model import IdentityConfig, MethodConfig, OidcConfig


def equivalent(desired: IdentityConfig, observed: IdentityConfig) -> bool:
    """Return ``True`` when no update is needed to make ``observed`` match ``desired``."""

    return not drifted_fields(desired, observed)


def drifted_fields(desired: IdentityConfig, observed: IdentityConfig) -> tuple[str, ...]:
    drifted: list[str] = []
    if desired.name != observed.name:
        drifted.append("name")
    if desired.ttl_seconds != observed.ttl_seconds:
        drifted.append("ttl_seconds")
    if desired.method != observed.method:
        drifted.append("method")
        return tuple(drifted)
    drifted.extend(_method_config_drift(desired.method_config, observed.method_config))
    return tuple(drifted)


@singledispatch
def _method_config_drift(desired: object, observed: MethodConfig) -> tuple[str, ...]:
    del observed
    raise TypeError(f"No drift comparison registered for {type(desired).__name__}")


@_method_config_drift.register
def _(desired: OidcConfig, observed: MethodConfig) -> tuple[str, ...]:
    drifted: list[str] = []
    if desired.discovery_url != observed.discovery_url:
        drifted.append("config_oidc.discovery_url")
    if desired.claims_type != observed.claims_type:
        drifted.append("config_oidc.claims_type")
    if not claims_equal(desired.claims, observed.claims):
        drifted.append("config_oidc.claims")
    return tuple(drifted)


__all__ = ["drifted_fields", "equivalent"]
