"""Create/read/update/delete lifecycle for service-account identities.

Each operation is a single round trip to the authority. Nothing is retried
or cached here; retry policy belongs to the authority client. Validation
happens before the client is called, so a rejected identity never causes a
partial remote change.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, NoReturn

from idsync.domain.codec import decode, encode
from idsync.domain.errors import AuthorityError, InvalidIdentityError, MissingSlugError
from idsync.domain.model import WriteOperation
from idsync.domain.ports.authority import AuthorityRequestError

if TYPE_CHECKING:
    from idsync.domain.model import IdentityConfig
    from idsync.domain.ports.authority import IdentityAuthorityClient

log = getLogger(__name__)


@dataclass(slots=True)
class IdentityLifecycle:
    client: IdentityAuthorityClient

    def create(self, parent_slug: str, desired: IdentityConfig) -> IdentityConfig:
        """Create ``desired`` under ``parent_slug`` and return the observed identity."""

        _require_parent(parent_slug)
        request = encode(desired, operation=WriteOperation.CREATE)
        log.info(f"Creating identity {desired.name!r} for service account {parent_slug}")
        try:
            entity = self.client.create(parent_slug, request)
        except Exception as exc:  # noqa: BLE001
            _raise_authority_error("create", exc)
        observed = decode(entity, parent_slug=parent_slug)
        log.info(f"Created identity {observed.slug} for service account {parent_slug}")
        return observed

    def read(self, parent_slug: str, slug: str) -> IdentityConfig | None:
        """Return the observed identity, or ``None`` when the authority no longer has it.

        ``None`` tells the caller to drop its stored slug and treat the
        identity as not yet created.
        """

        _require_parent(parent_slug)
        _require_slug(slug)
        try:
            entity = self.client.read(parent_slug, slug)
        except AuthorityRequestError as exc:
            if exc.is_not_found:
                log.warning(f"Identity {slug} not found for service account {parent_slug}")
                return None
            _raise_authority_error("read", exc)
        except Exception as exc:  # noqa: BLE001
            _raise_authority_error("read", exc)
        return decode(entity, parent_slug=parent_slug)

    def update(self, parent_slug: str, desired: IdentityConfig) -> IdentityConfig:
        """Apply ``desired`` to the existing identity named by ``desired.slug``.

        The parent slug is never sent as a mutable field. Moving an identity
        to another parent is a replacement and is handled by the planner.
        """

        _require_parent(parent_slug)
        request = encode(desired, operation=WriteOperation.UPDATE)
        log.info(f"Updating identity {desired.slug} for service account {parent_slug}")
        try:
            entity = self.client.update(parent_slug, request)
        except Exception as exc:  # noqa: BLE001
            _raise_authority_error("update", exc)
        return decode(entity, parent_slug=parent_slug)

    def delete(self, parent_slug: str, slug: str) -> None:
        _require_parent(parent_slug)
        _require_slug(slug)
        log.info(f"Deleting identity {slug} for service account {parent_slug}")
        try:
            self.client.delete(parent_slug, slug)
        except Exception as exc:  # noqa: BLE001
            _raise_authority_error("delete", exc)


def _require_parent(parent_slug: str) -> None:
    if not parent_slug:
        raise InvalidIdentityError(
            "service_account_slug must not be empty", field="service_account_slug"
        )


def _require_slug(slug: str) -> None:
    if not slug:
        raise MissingSlugError


def _raise_authority_error(operation: str, exc: Exception) -> NoReturn:
    log.error(f"Identity authority {operation} failed: {exc}")
    raise AuthorityError(operation, exc) from exc


__all__ = ["IdentityLifecycle"]
