"""Application configuration for imagelab.

Vendor credentials are read from the environment (optionally from a local
``.env`` file). Every credential is optional: a missing key only disables the
corresponding service, which then answers with a configuration error.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Pydantic settings container for vendor integrations."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    remove_bg_api_key: str | None = Field(
        default=None,
        description="Remove.bg API key (X-Api-Key header).",
    )
    meshy_api_key: str | None = Field(
        default=None,
        description="Bearer token for the Meshy image-to-3D API.",
    )
    google_cloud_api_key: str | None = Field(
        default=None,
        description="API key for Google Cloud Vision requests.",
    )
    google_cloud_project_id: str | None = Field(
        default=None,
        description="Numeric project id required by the Vertex lifestyle placeholder.",
    )
    claid_api_key: str | None = Field(
        default=None,
        description="Bearer token for the Claid.ai image edit API.",
    )
    serpapi_key: str | None = Field(
        default=None,
        description="SerpAPI key used for Google Lens searches.",
    )
    cloudinary_cloud_name: str | None = Field(
        default=None,
        description="Cloudinary account (cloud) name.",
    )
    cloudinary_upload_preset: str | None = Field(
        default=None,
        description="Unsigned upload preset used to relay base64 uploads.",
    )
    cloudinary_api_key: str | None = Field(
        default=None,
        description="Cloudinary Admin API key.",
    )
    cloudinary_api_secret: str | None = Field(
        default=None,
        description="Cloudinary Admin API secret.",
    )
    meshy_poll_interval_seconds: float = Field(
        default=5.0,
        ge=0.0,
        description="Delay awaited before every Meshy status poll.",
    )
    meshy_max_poll_attempts: int = Field(
        default=60,
        ge=1,
        description="Poll attempts before a Meshy task is reported as pending.",
    )
    vendor_timeout_seconds: float = Field(
        default=30.0,
        ge=0.1,
        description="Per-request timeout applied to vendor HTTP calls.",
    )
    serpapi_timeout_seconds: float = Field(
        default=30.0,
        ge=0.1,
        description="Total timeout for a Google Lens search request.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ...).",
    )

    @property
    def cloudinary_upload_configured(self) -> bool:
        return bool(self.cloudinary_cloud_name and self.cloudinary_upload_preset)

    @property
    def cloudinary_admin_configured(self) -> bool:
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )

    def vendor_flags(self) -> dict[str, bool]:
        """Return which vendor integrations have their credentials configured."""

        return {
            "removebg": bool(self.remove_bg_api_key),
            "meshy": bool(self.meshy_api_key),
            "google_vision": bool(self.google_cloud_api_key),
            "google_cloud_project": bool(self.google_cloud_project_id),
            "claid": bool(self.claid_api_key),
            "serpapi": bool(self.serpapi_key),
            "cloudinary_upload": self.cloudinary_upload_configured,
            "cloudinary_admin": self.cloudinary_admin_configured,
        }


def load_config() -> AppConfig:
    """Load configuration from environment."""
    return AppConfig()


__all__ = ["AppConfig", "load_config"]
