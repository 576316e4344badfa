"""Pydantic models for CLI configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from halforms.config.constants import DEFAULT_TIMEOUT


class ServiceProfile(BaseModel):
    """A named HAL-FORMS service connection profile."""

    name: str
    url: str = Field(description="Entry point of the API, e.g. https://api.example.com/")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, le=600, description="Request timeout in seconds",
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra headers sent with every request",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v


class CLIConfig(BaseModel):
    """Root configuration model."""

    default_profile: str | None = None
    default_format: str = "table"
    profiles: dict[str, ServiceProfile] = Field(default_factory=dict)
