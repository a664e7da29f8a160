"""Transport configuration — endpoint, API version and credentials."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com"
DEFAULT_API_VERSION = "v1beta"


class TransportConfig(BaseModel):
    """Settings for the Generative Language HTTP transport.

    ``endpoint`` may be given as a bare host (``host:443``), in which case
    HTTPS is assumed. Unknown settings are rejected rather than ignored.
    """

    model_config = {"extra": "forbid"}

    endpoint: str = DEFAULT_ENDPOINT
    api_version: str = DEFAULT_API_VERSION
    api_key: str | None = None
    quota_project: str | None = None
    timeout: float | None = 60.0
    headers: dict[str, str] = Field(default_factory=lambda: dict[str, str]())

    @field_validator("endpoint")
    @classmethod
    def _default_scheme(cls, value: str) -> str:
        if "://" not in value:
            value = f"https://{value}"
        return value.rstrip("/")

    @property
    def base_url(self) -> str:
        """Endpoint joined with the API version, e.g. ``https://host/v1beta``."""
        return f"{self.endpoint}/{self.api_version}"
