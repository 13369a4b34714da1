from __future__ import annotations

import pytest

from idsync.domain.claims import claims_equal, from_canonical, to_canonical
from idsync.domain.errors import CanonicalizationError, DuplicateClaimKeyError, EmptyValueSetError
from idsync.domain.model import ClaimRule


def test_claim_order_does_not_affect_canonical_form() -> None:
    first = to_canonical([("aud", ["A", "B"]), ("sub", ["S"])])
    second = to_canonical([("sub", ["S"]), ("aud", ["B", "A"])])

    assert first == second
    assert claims_equal(first, second)


def test_duplicate_key_is_rejected_with_key_name() -> None:
    with pytest.raises(DuplicateClaimKeyError, match="'aud'") as exc:
        to_canonical([("aud", ["A"]), ("aud", ["B"])])

    assert exc.value.key == "aud"
    assert isinstance(exc.value, CanonicalizationError)


def test_empty_value_set_is_rejected() -> None:
    with pytest.raises(EmptyValueSetError) as exc:
        to_canonical([("aud", [])])

    assert exc.value.key == "aud"


def test_repeated_values_collapse_silently() -> None:
    canonical = to_canonical([ClaimRule(key="aud", values=("A", "A", "B"))])

    assert canonical == {"aud": frozenset({"A", "B"})}


def test_from_canonical_emits_one_rule_per_key() -> None:
    rules = from_canonical({"sub": frozenset({"S2", "S1"}), "aud": frozenset({"A"})})

    assert {rule.key for rule in rules} == {"aud", "sub"}
    assert len(rules) == 2
    assert to_canonical(rules) == {"sub": frozenset({"S1", "S2"}), "aud": frozenset({"A"})}


def test_claims_equal_detects_value_and_key_differences() -> None:
    base = {"aud": frozenset({"A"}), "sub": frozenset({"S"})}

    assert not claims_equal(base, {"aud": frozenset({"A"}), "sub": frozenset({"T"})})
    assert not claims_equal(base, {"aud": frozenset({"A"})})
    assert not claims_equal(
        base, {"aud": frozenset({"A"}), "sub": frozenset({"S"}), "iss": frozenset({"I"})}
    )
