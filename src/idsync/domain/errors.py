"""Error taxonomy for identity reconciliation.

Validation errors are raised before any authority call is attempted.
Collaborator failures are wrapped in ``AuthorityError`` with the original
exception chained as ``__cause__``.
"""

from __future__ import annotations


class IdentitySyncError(Exception):
    """Base class for all reconciliation errors."""


class CanonicalizationError(IdentitySyncError, ValueError):
    """Raised when a claim rule list cannot be turned into a canonical mapping."""

    def __init__(self, message: str, *, key: str) -> None:
        super().__init__(message)
        self.key = key


class DuplicateClaimKeyError(CanonicalizationError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Duplicate claim key: {key!r}", key=key)


class EmptyValueSetError(CanonicalizationError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Claim {key!r} must list at least one value", key=key)


class InvalidIdentityError(IdentitySyncError, ValueError):
    """Raised when a desired identity violates a model invariant."""

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message)
        self.field = field


class MissingRequiredClaimError(InvalidIdentityError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Missing required claim: {key!r}", field="config_oidc.claims")
        self.key = key


class MissingSlugError(InvalidIdentityError):
    def __init__(self) -> None:
        super().__init__("An existing identity slug is required for this operation", field="slug")


class UnsupportedMethodError(IdentitySyncError):
    """Desired state names a method variant that cannot be encoded."""

    def __init__(self, method: object) -> None:
        super().__init__(f"Unsupported auth method: {method!r}")
        self.method = method


class UnknownAuthMethodError(IdentitySyncError):
    """Authority response names a method variant that cannot be decoded."""

    def __init__(self, method: object) -> None:
        super().__init__(f"Unknown auth method type: {method!r}")
        self.method = method


class MalformedEntityError(IdentitySyncError):
    """Authority response is missing data required by its method variant."""

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message)
        self.field = field


class AuthorityError(IdentitySyncError):
    """Raised when the identity authority rejects or fails a request."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"Identity authority {operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


__all__ = [
    "AuthorityError",
    "CanonicalizationError",
    "DuplicateClaimKeyError",
    "EmptyValueSetError",
    "IdentitySyncError",
    "InvalidIdentityError",
    "MalformedEntityError",
    "MissingRequiredClaimError",
    "MissingSlugError",
    "UnknownAuthMethodError",
    "UnsupportedMethodError",
]
