from __future__ import annotations

import pytest

from idsync.domain.lifecycle import IdentityLifecycle
from tests.helpers.identities import FakeIdentityAuthority


@pytest.fixture
def authority() -> FakeIdentityAuthority:
    return FakeIdentityAuthority()


@pytest.fixture
def lifecycle(authority: FakeIdentityAuthority) -> IdentityLifecycle:
    return IdentityLifecycle(authority)
