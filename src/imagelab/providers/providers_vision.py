"""Google Cloud Vision drivers.

``GoogleVisionDriver`` relays label/object/text/face annotations.
``GoogleCloudDriver`` backs the resize, lifestyle and compress operations,
which only probe image properties through Vision and describe the requested
transformation; the actual rendering is delegated to external processing.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from ..exceptions import ConfigurationError, InputError, UpstreamError
from ..media import ImageReference
from ..processing.sanitizer import round_half_up
from ..schemas.results import GoogleCloudResult, VisionResult
from .providers_base import (
    VendorDriver,
    extract_vendor_error,
    is_success,
    raise_for_vendor_status,
    translate_http_errors,
)

logger = logging.getLogger(__name__)

VISION_ENDPOINT = "https://vision.googleapis.com/v1/images:annotate"
MAX_RESULTS = 10
SUPPORTED_OPERATIONS = ("resize", "lifestyle", "compress")
DEFAULT_QUALITY = 80
# Rough compressed/original ratio per target format.
COMPRESSION_FACTORS = {"webp": 0.7, "jpeg": 0.85}


def _vision_image(image: ImageReference) -> dict[str, Any]:
    if image.is_inline:
        return {"content": image.raw_base64}
    return {"source": {"imageUri": image.source}}


@dataclass(slots=True)
class GoogleVisionDriver(VendorDriver):
    """Annotate an image with the requested Vision features."""

    api_endpoint: str = VISION_ENDPOINT
    log: logging.Logger = field(default_factory=lambda: logger)

    vendor_name = "Google Vision"

    async def annotate(self, image: ImageReference, features: Iterable[str]) -> VisionResult:
        api_key = self._require(
            self.config.google_cloud_api_key, "Google Cloud API key not configured"
        )
        body = {
            "requests": [
                {
                    "image": _vision_image(image),
                    "features": [
                        {"type": feature, "maxResults": MAX_RESULTS} for feature in features
                    ],
                }
            ]
        }
        with translate_http_errors(self.vendor_name, timeout=self.timeout):
            async with self._client() as client:
                response = await client.post(
                    self.api_endpoint, params={"key": api_key}, json=body
                )
        raise_for_vendor_status(response, self.vendor_name)

        data = response.json()
        responses = data.get("responses") if isinstance(data, dict) else None
        result = responses[0] if isinstance(responses, list) and responses else None
        result = result if isinstance(result, dict) else {}
        return VisionResult(
            labels=result.get("labelAnnotations") or [],
            objects=result.get("localizedObjectAnnotations") or [],
            text=result.get("textAnnotations") or [],
            faces=result.get("faceAnnotations") or [],
            raw=result or None,
        )


@dataclass(slots=True)
class GoogleCloudDriver(VendorDriver):
    """Resize/lifestyle/compress operations backed by Vision image properties."""

    api_endpoint: str = VISION_ENDPOINT
    log: logging.Logger = field(default_factory=lambda: logger)

    vendor_name = "Google Cloud"

    async def run(
        self,
        image: ImageReference,
        operation: str | None,
        options: dict[str, Any] | None = None,
    ) -> GoogleCloudResult:
        if not operation:
            raise InputError("Operation is required")
        if operation not in SUPPORTED_OPERATIONS:
            raise InputError(f"Unknown operation: {operation}")
        options = options or {}
        if operation == "resize" and not (options.get("width") or options.get("height")):
            raise InputError("Width or height is required for resize")

        api_key = self._require(
            self.config.google_cloud_api_key, "Google Cloud API key not configured"
        )
        if operation == "lifestyle" and not self.config.google_cloud_project_id:
            raise ConfigurationError(
                "Google Cloud Project ID not configured. "
                "Add GOOGLE_CLOUD_PROJECT_ID to environment variables.",
            )

        data_url = await self._as_data_url(image)
        inline = ImageReference(data_url=data_url)
        original_size = len(inline.decode())

        if operation == "resize":
            await self._probe_properties(inline, api_key=api_key, label="Resize")
            width = options.get("width")
            height = options.get("height")
            return GoogleCloudResult(
                operation="resize",
                result_url=data_url,
                original_size=original_size,
                dimensions={"width": width or "auto", "height": height or "auto"},
                maintain_aspect_ratio=options.get("maintainAspectRatio"),
                message=(
                    "Resize parameters configured. "
                    "Connect to Cloud Run/Functions for actual processing."
                ),
            )

        if operation == "lifestyle":
            return GoogleCloudResult(
                operation="lifestyle",
                result_url=data_url,
                prompt=options.get("prompt") or "Product lifestyle image",
                style=options.get("style") or "modern",
                message=(
                    "Lifestyle generation configured. "
                    "Requires Vertex AI Imagen API with OAuth2 authentication."
                ),
            )

        quality = options.get("quality")
        if isinstance(quality, bool) or not isinstance(quality, (int, float)) or quality <= 0:
            quality = DEFAULT_QUALITY
        fmt = str(options.get("format") or "jpeg")
        await self._probe_properties(inline, api_key=api_key, label="Compression analysis")
        estimated = estimate_compressed_size(original_size, quality, fmt)
        return GoogleCloudResult(
            operation="compress",
            result_url=data_url,
            original_size=original_size,
            new_size=estimated,
            quality=quality,
            format=fmt,
            savings=savings_label(original_size, estimated),
            message=(
                "Compression parameters configured. "
                "Connect to Cloud Run/Functions for actual processing."
            ),
        )

    async def _as_data_url(self, image: ImageReference) -> str:
        if image.is_inline:
            return image.data_url or ""
        with translate_http_errors(self.vendor_name, timeout=self.timeout):
            async with self._client() as client:
                response = await client.get(image.source)
        if not is_success(response):
            raise UpstreamError(
                f"Could not download image: {response.status_code}",
                vendor_status=response.status_code,
                suggestion="Make sure the image URL is publicly accessible.",
            )
        content_type = response.headers.get("content-type") or "image/jpeg"
        content_type = content_type.split(";")[0].strip()
        encoded = base64.b64encode(response.content).decode("ascii")
        return f"data:{content_type};base64,{encoded}"

    async def _probe_properties(
        self, image: ImageReference, *, api_key: str, label: str
    ) -> None:
        body = {
            "requests": [
                {
                    "image": {"content": image.raw_base64},
                    "features": [{"type": "IMAGE_PROPERTIES"}],
                }
            ]
        }
        with translate_http_errors(self.vendor_name, timeout=self.timeout):
            async with self._client() as client:
                response = await client.post(
                    self.api_endpoint, params={"key": api_key}, json=body
                )
        if not is_success(response):
            raise UpstreamError(
                f"{label} failed: {extract_vendor_error(response)}",
                status_code=500,
            )


def estimate_compressed_size(original_size: int, quality: float, fmt: str) -> int:
    factor = COMPRESSION_FACTORS.get(fmt, 1.0)
    return round_half_up(original_size * (quality / 100) * factor)


def savings_label(original_size: int, estimated_size: int) -> str:
    if not original_size:
        return "0%"
    return f"{round_half_up((1 - estimated_size / original_size) * 100)}%"


__all__ = [
    "GoogleCloudDriver",
    "GoogleVisionDriver",
    "estimate_compressed_size",
    "savings_label",
]
