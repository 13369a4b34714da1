"""Decide which lifecycle operation brings observed state to desired state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from idsync.domain.drift import drifted_fields

if TYPE_CHECKING:
    from idsync.domain.model import IdentityConfig


class ChangeAction(StrEnum):
    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"
    REPLACE = "replace"


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangePlan:
    action: ChangeAction
    drift: tuple[str, ...] = ()
    reason: str | None = None


def plan_change(desired: IdentityConfig, observed: IdentityConfig | None) -> ChangePlan:
    """Plan the change for one identity.

    ``observed`` is ``None`` when the identity was never created or was
    deleted out of band. A different parent slug forces a replacement because
    the owning service account cannot change in place.
    """

    if observed is None:
        return ChangePlan(action=ChangeAction.CREATE, reason="identity does not exist")
    if observed.parent_slug != desired.parent_slug:
        return ChangePlan(
            action=ChangeAction.REPLACE,
            drift=("service_account_slug",),
            reason=f"service account changed from {observed.parent_slug} to {desired.parent_slug}",
        )
    drift = drifted_fields(desired, observed)
    if drift:
        return ChangePlan(action=ChangeAction.UPDATE, drift=drift, reason="fields differ")
    return ChangePlan(action=ChangeAction.NOOP, reason="identical")


__all__ = ["ChangeAction", "ChangePlan", "plan_change"]
