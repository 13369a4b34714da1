"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from idsync.adapters.doppler import build_doppler_client
from idsync.domain.codec import encode
from idsync.domain.lifecycle import IdentityLifecycle
from idsync.domain.model import WriteOperation
from idsync.domain.plan import ChangeAction, ChangePlan, plan_change

if TYPE_CHECKING:
    from idsync.domain.model import IdentityConfig
    from idsync.domain.ports.authority import IdentityAuthorityClient


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ApplyResult:
    plan: ChangePlan
    identity: IdentityConfig

    @property
    def action(self) -> ChangeAction:
        return self.plan.action


def apply_identity(
    desired: IdentityConfig,
    *,
    slug: str | None = None,
    prior_parent_slug: str | None = None,
    client: IdentityAuthorityClient | None = None,
) -> ApplyResult:
    """Bring the authority in line with ``desired``.

    ``slug`` is the handle stored from a previous run, if any, and
    ``prior_parent_slug`` the service account it was created under when that
    differs from ``desired.parent_slug``. An identity missing on the
    authority is created again.
    """

    # Fail on invalid input before touching the authority.
    encode(desired, operation=WriteOperation.CREATE)

    lifecycle = IdentityLifecycle(client or build_doppler_client())
    observed: IdentityConfig | None = None
    if slug:
        observed = lifecycle.read(prior_parent_slug or desired.parent_slug, slug)
        if observed is None:
            log.info(f"Identity {slug} vanished from the authority; it will be recreated")

    plan = plan_change(desired, observed)
    log.info(f"Planned {plan.action} for identity {desired.name!r}: {plan.reason}")

    if plan.action is ChangeAction.CREATE or observed is None:
        identity = lifecycle.create(desired.parent_slug, desired)
    elif plan.action is ChangeAction.REPLACE:
        lifecycle.delete(observed.parent_slug, observed.slug)
        identity = lifecycle.create(desired.parent_slug, desired)
    elif plan.action is ChangeAction.UPDATE:
        log.info(f"Drifted fields: {', '.join(plan.drift)}")
        identity = lifecycle.update(desired.parent_slug, desired.with_slug(observed.slug))
    else:
        identity = observed

    return ApplyResult(plan=plan, identity=identity)


def destroy_identity(
    parent_slug: str,
    slug: str,
    *,
    client: IdentityAuthorityClient | None = None,
) -> None:
    """Delete the identity ``slug`` owned by ``parent_slug``."""

    IdentityLifecycle(client or build_doppler_client()).delete(parent_slug, slug)


__all__ = ["ApplyResult", "apply_identity", "destroy_identity"]
