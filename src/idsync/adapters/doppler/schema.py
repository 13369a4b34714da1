"""Pydantic models for the Doppler service-account identity API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DopplerBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class OidcConfigPayload(DopplerBaseModel):
    discovery_url: str
    claims_type: str | None = None
    claims: dict[str, list[str]] = Field(default_factory=dict)


class IdentityWritePayload(DopplerBaseModel):
    name: str
    ttl_seconds: int
    method: str
    config_oidc: OidcConfigPayload | None = None


class IdentityPayload(DopplerBaseModel):
    slug: str
    name: str
    ttl_seconds: int
    method: str
    config_oidc: OidcConfigPayload | None = None


class IdentityResponse(DopplerBaseModel):
    identity: IdentityPayload


class ErrorResponse(DopplerBaseModel):
    messages: list[str] = Field(default_factory=list)
    success: bool | None = None
