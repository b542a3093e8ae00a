"""Request bodies accepted by the processing endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from ..media import ImageReference
from .base import ApiModel

DEFAULT_VISION_FEATURES = ("LABEL_DETECTION", "OBJECT_LOCALIZATION")


class ImageRequest(ApiModel):
    """``imageUrl`` or ``imageBase64`` (``data:<mime>;base64,<payload>``)."""

    image_url: str | None = None
    image_base64: str | None = None

    def image_reference(self) -> ImageReference:
        return ImageReference.from_request(self.image_url, self.image_base64)


class VisionRequest(ImageRequest):
    features: list[str] = Field(default_factory=lambda: list(DEFAULT_VISION_FEATURES))


class GoogleCloudRequest(ImageRequest):
    operation: str | None = None
    options: dict[str, Any] | None = None


class ClaidRequest(ImageRequest):
    # Loosely typed on purpose: the sanitizer owns its validation.
    operations: Any = None
    output: dict[str, Any] | None = None


class CloudinaryValidateRequest(ImageRequest):
    operations: dict[str, Any] = Field(default_factory=dict)


class ProductRecognitionRequest(ImageRequest):
    pass


__all__ = [
    "ClaidRequest",
    "CloudinaryValidateRequest",
    "DEFAULT_VISION_FEATURES",
    "GoogleCloudRequest",
    "ImageRequest",
    "ProductRecognitionRequest",
    "VisionRequest",
]
