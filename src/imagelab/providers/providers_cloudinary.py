"""Cloudinary upload and Admin API client."""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from ..exceptions import ConfigurationError, UpstreamError
from ..logging import truncate
from .providers_base import VendorDriver, is_success, translate_http_errors

logger = logging.getLogger(__name__)


def attachment_url(secure_url: str) -> str:
    """Direct-download variant of a delivery URL (no transformations applied)."""
    return secure_url.replace("/upload/", "/upload/fl_attachment/", 1)


def upload_signature(timestamp: int, api_secret: str) -> str:
    return hashlib.sha256(f"timestamp={timestamp}{api_secret}".encode("utf-8")).hexdigest()


@dataclass(slots=True)
class CloudinaryClient(VendorDriver):
    """Relay uploads to Cloudinary and read asset metadata."""

    api_base_url: str = "https://api.cloudinary.com/v1_1"
    log: logging.Logger = field(default_factory=lambda: logger)

    vendor_name = "Cloudinary"

    def _upload_endpoint(self, cloud_name: str) -> str:
        return f"{self.api_base_url}/{cloud_name}/image/upload"

    async def upload_unsigned(self, data_url: str) -> str:
        """Upload a data URL with the unsigned preset and return its secure URL."""

        if not self.config.cloudinary_upload_configured:
            raise ConfigurationError(
                "Cloudinary not configured.",
                details="To process base64 images, configure Cloudinary upload settings.",
                suggestion="Add CLOUDINARY_CLOUD_NAME and CLOUDINARY_UPLOAD_PRESET to .env",
            )
        cloud_name = self.config.cloudinary_cloud_name or ""
        form = {"file": data_url, "upload_preset": self.config.cloudinary_upload_preset}

        with translate_http_errors(self.vendor_name, timeout=self.timeout):
            async with self._client() as client:
                response = await client.post(self._upload_endpoint(cloud_name), data=form)
        if not is_success(response):
            self.log.error(
                "cloudinary.upload.failed status=%s body_preview=%s",
                response.status_code,
                truncate(response.text or ""),
            )
            raise UpstreamError(
                f"Cloudinary upload failed: {response.status_code}",
                vendor_status=response.status_code,
                suggestion="Check your Cloudinary upload preset configuration",
            )
        secure_url = _json(response).get("secure_url")
        if not secure_url:
            raise UpstreamError("Cloudinary upload did not return a secure URL")
        self.log.info("cloudinary.upload.success", extra={"secure_url": secure_url})
        return str(secure_url)

    async def upload_signed(self, remote_url: str) -> dict[str, Any]:
        """Fetch ``remote_url`` into the account using a signed upload."""

        api_key, api_secret, cloud_name = self._admin_credentials()
        timestamp = int(time.time())
        form = {
            "file": remote_url,
            "timestamp": str(timestamp),
            "api_key": api_key,
            "signature": upload_signature(timestamp, api_secret),
        }
        with translate_http_errors(self.vendor_name, timeout=self.timeout):
            async with self._client() as client:
                response = await client.post(self._upload_endpoint(cloud_name), data=form)
        if not is_success(response):
            raise UpstreamError(
                "Failed to upload image to Cloudinary",
                vendor_status=response.status_code,
                suggestion=(
                    "Make sure your image URL is accessible and Cloudinary "
                    "credentials are correct"
                ),
            )
        return _json(response)

    async def fetch_resource(self, public_id: str) -> dict[str, Any] | None:
        """Admin API resource details with colours and quality analysis."""

        api_key, api_secret, cloud_name = self._admin_credentials()
        url = (
            f"{self.api_base_url}/{cloud_name}/resources/image/upload/"
            f"{quote(public_id, safe='')}"
        )
        params = {"colors": "true", "image_metadata": "true", "quality_analysis": "true"}
        with translate_http_errors(self.vendor_name, timeout=self.timeout):
            async with self._client() as client:
                response = await client.get(url, params=params, auth=(api_key, api_secret))
        if not is_success(response):
            self.log.error(
                "cloudinary.resource.error status=%s body_preview=%s",
                response.status_code,
                truncate(response.text or ""),
            )
            return None
        return _json(response)

    def _admin_credentials(self) -> tuple[str, str, str]:
        if not self.config.cloudinary_admin_configured:
            raise ConfigurationError(
                "Cloudinary credentials not configured",
                suggestion=(
                    "Add CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY and "
                    "CLOUDINARY_API_SECRET to the environment"
                ),
            )
        return (
            self.config.cloudinary_api_key or "",
            self.config.cloudinary_api_secret or "",
            self.config.cloudinary_cloud_name or "",
        )


def _json(response: Any) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise UpstreamError("Cloudinary returned an unreadable response") from exc
    return data if isinstance(data, dict) else {}


__all__ = ["CloudinaryClient", "attachment_url", "upload_signature"]
