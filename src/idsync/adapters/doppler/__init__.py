"""Doppler adapter package."""

from __future__ import annotations

from .client import DopplerAPIError, DopplerIdentityClient, build_doppler_client
from .schema import ErrorResponse, IdentityPayload, IdentityResponse, OidcConfigPayload
from .translator import translate_identity, translate_request

__all__ = [
    "DopplerAPIError",
    "DopplerIdentityClient",
    "ErrorResponse",
    "IdentityPayload",
    "IdentityResponse",
    "OidcConfigPayload",
    "build_doppler_client",
    "translate_identity",
    "translate_request",
]
