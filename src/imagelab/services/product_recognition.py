"""Reverse image product search: upload relay, Google Lens, flattening."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import structlog

from ..exceptions import ConfigurationError, InputError, ServiceError, UpstreamError
from ..media import ImageReference, is_http_url
from ..processing.product_search import process_product_info
from ..providers.providers_cloudinary import CloudinaryClient
from ..providers.providers_serpapi import SerpApiDriver
from ..schemas.results import (
    ProductRecognitionInfo,
    ProductRecognitionResult,
    SearchMetadata,
)

logger = structlog.get_logger(__name__)

ENDPOINT_PATH = "/api/product-recognition"


@dataclass(slots=True)
class ProductRecognitionService:
    """Identify products shown in an image through SerpAPI Google Lens."""

    serpapi: SerpApiDriver
    cloudinary: CloudinaryClient
    log: Any = field(default_factory=lambda: logger)

    async def recognize(self, image: ImageReference) -> ProductRecognitionResult:
        config = self.serpapi.config
        if not config.serpapi_key:
            raise ConfigurationError(
                "SerpAPI key not configured. Please check your environment variables."
            )

        if image.is_inline:
            image_url = await self._upload(image)
            source_label = "Uploaded to Cloudinary"
        else:
            image_url = image.source
            if not is_http_url(image_url):
                raise InputError("Invalid URL format provided.")
            source_label = "Provided URL"

        serp_data = await self.serpapi.search(image_url)
        recognition = process_product_info(serp_data)
        metadata = serp_data.get("search_metadata")
        search_status = metadata.get("status") if isinstance(metadata, dict) else None

        self.log.info(
            "product_recognition.done",
            labels=len(recognition.labels),
            logos=len(recognition.logos),
            stores=len(recognition.product_details.stores),
        )
        return ProductRecognitionResult(
            **recognition.model_dump(),
            search_metadata=SearchMetadata(
                status=str(search_status or "Unknown"),
                image_url=source_label,
                processed_at=datetime.now(timezone.utc).isoformat(),
            ),
        )

    async def _upload(self, image: ImageReference) -> str:
        config = self.cloudinary.config
        if not config.cloudinary_upload_configured:
            raise InputError(
                "Cloudinary not configured.",
                details=(
                    "To process base64 images, configure Cloudinary in your "
                    "environment variables."
                ),
                suggestion="Add CLOUDINARY_CLOUD_NAME and CLOUDINARY_UPLOAD_PRESET to .env",
            )
        if not image.source.startswith("data:image/"):
            raise InputError(
                "Invalid image format",
                details="Expected base64 data URL starting with data:image/",
            )
        try:
            return await self.cloudinary.upload_unsigned(image.source)
        except ServiceError as exc:
            self.log.error("product_recognition.upload.failed", error=exc.message)
            raise UpstreamError(
                "Failed to upload image",
                details=exc.message,
                suggestion="Check your Cloudinary upload preset configuration",
                status_code=500,
            ) from exc

    def info(self) -> ProductRecognitionInfo:
        """Describe the endpoint and which of its dependencies are configured."""

        serpapi = bool(self.serpapi.config.serpapi_key)
        cloudinary = self.cloudinary.config.cloudinary_upload_configured
        ready = serpapi and cloudinary
        return ProductRecognitionInfo(
            status="Configured" if ready else "Not fully configured",
            endpoints={
                "POST": ENDPOINT_PATH,
                "description": "Recognize products from images using Google Lens via SerpAPI",
                "parameters": {
                    "imageUrl": "Publicly accessible image URL (optional)",
                    "imageBase64": (
                        "Base64 data URL (optional, requires Cloudinary configuration)"
                    ),
                },
            },
            configuration={
                "serpapi": serpapi,
                "cloudinary": cloudinary,
                "note": "Ready to process images" if ready else "Check your environment variables",
            },
        )


__all__ = ["ProductRecognitionService"]
