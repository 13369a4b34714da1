"""Canonical form for OIDC claim rules.

Declarations and wire payloads carry claims as lists of ``{key, values}``
entries, but neither the key order nor the value order means anything. Claims
are converted to a ``key -> frozenset`` mapping at the codec boundary so the
rest of the domain never reasons about order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from idsync.domain.errors import DuplicateClaimKeyError, EmptyValueSetError
from idsync.domain.model import ClaimRule

if TYPE_CHECKING:
    from collections.abc import Iterable

    from idsync.domain.model import CanonicalClaims

type ClaimPair = tuple[str, Iterable[str]]


def to_canonical(rules: Iterable[ClaimRule | ClaimPair]) -> CanonicalClaims:
    """Build the canonical mapping, rejecting repeated keys and empty value sets."""

    canonical: dict[str, frozenset[str]] = {}
    for rule in rules:
        key, values = (rule.key, rule.values) if isinstance(rule, ClaimRule) else rule
        if key in canonical:
            raise DuplicateClaimKeyError(key)
        value_set = frozenset(values)
        if not value_set:
            raise EmptyValueSetError(key)
        canonical[key] = value_set
    return canonical


def from_canonical(claims: CanonicalClaims) -> tuple[ClaimRule, ...]:
    """Flatten a canonical mapping back into list-shaped rules.

    Output is sorted only to keep payloads stable; callers must not depend on it.
    """

    return tuple(ClaimRule(key=key, values=tuple(sorted(claims[key]))) for key in sorted(claims))


def claims_equal(left: CanonicalClaims, right: CanonicalClaims) -> bool:
    if left.keys() != right.keys():
        return False
    return all(frozenset(left[key]) == frozenset(right[key]) for key in left)


__all__ = ["ClaimPair", "claims_equal", "from_canonical", "to_canonical"]
