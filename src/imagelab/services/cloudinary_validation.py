"""E-commerce validation of images stored on (or relayed to) Cloudinary."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from ..exceptions import ConfigurationError, InputError, NotFoundError
from ..processing.normalizer import analyze_image_metadata
from ..processing.transformations import (
    build_transformation_url,
    extract_public_id,
    is_cloudinary_url,
)
from ..providers.providers_cloudinary import CloudinaryClient
from ..schemas.results import CloudinaryValidationResult

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class CloudinaryValidationService:
    """Resolve a public id, read real asset metadata and score it."""

    cloudinary: CloudinaryClient
    log: Any = field(default_factory=lambda: logger)

    async def validate(
        self, image_url: str | None, operations: Mapping[str, Any] | None = None
    ) -> CloudinaryValidationResult:
        if not image_url:
            raise InputError("Image URL is required")
        config = self.cloudinary.config
        if not config.cloudinary_admin_configured:
            raise ConfigurationError("Cloudinary credentials not configured")

        if is_cloudinary_url(image_url):
            public_id = extract_public_id(image_url) or ""
        else:
            uploaded = await self.cloudinary.upload_signed(image_url)
            public_id = str(uploaded.get("public_id") or "")
            self.log.info("cloudinary.external.uploaded", public_id=public_id)
        if not public_id:
            raise InputError("Could not process image URL")

        resource = await self.cloudinary.fetch_resource(public_id)
        if resource is None:
            raise NotFoundError("Could not retrieve image data from Cloudinary")

        result_url = build_transformation_url(
            config.cloudinary_cloud_name or "", public_id, operations or {}
        )
        normalized = analyze_image_metadata(resource)
        self.log.info(
            "cloudinary.validation.done",
            public_id=public_id,
            score=normalized.validation.quality.score,
            compliant=normalized.validation.compliance.passed,
        )
        return CloudinaryValidationResult(
            result_url=result_url,
            validation=normalized.validation,
            metadata=normalized.metadata,
            raw_data=resource,
        )


__all__ = ["CloudinaryValidationService"]
