"""Response envelopes, one variant per vendor service.

Every variant carries a ``service`` literal so a caller holding a
:data:`ServiceResult` can branch on a single discriminator.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from ..processing.models import ImageMetadata, Validation
from ..processing.product_search import ProductRecognition
from .base import ApiModel


class ErrorResponse(ApiModel):
    success: Literal[False] = False
    error: str
    details: str | None = None
    suggestion: str | None = None


class ServiceResponse(ApiModel):
    success: bool = True


class RemoveBgResult(ServiceResponse):
    service: Literal["removebg"] = "removebg"
    result_url: str


class MeshyResult(ServiceResponse):
    service: Literal["meshy"] = "meshy"
    status: Literal["SUCCEEDED", "PENDING"]
    task_id: str
    model_url: str | None = None
    thumbnail_url: str | None = None
    message: str | None = None


class VisionResult(ServiceResponse):
    service: Literal["google_vision"] = "google_vision"
    labels: list[Any] = Field(default_factory=list)
    objects: list[Any] = Field(default_factory=list)
    text: list[Any] = Field(default_factory=list)
    faces: list[Any] = Field(default_factory=list)
    raw: dict[str, Any] | None = None


class GoogleCloudResult(ServiceResponse):
    service: Literal["google_cloud"] = "google_cloud"
    operation: Literal["resize", "lifestyle", "compress"]
    result_url: str
    message: str
    original_size: int | None = None
    new_size: int | None = None
    dimensions: dict[str, int | str] | None = None
    maintain_aspect_ratio: bool | None = None
    quality: int | float | None = None
    format: str | None = None
    savings: str | None = None
    prompt: str | None = None
    style: str | None = None


class ClaidMetadata(BaseModel):
    """Vendor sizes in pixels; keys stay snake_case like the metadata blocks."""

    original_size: float | None = None
    new_size: float | None = None
    width: int | None = None
    height: int | None = None
    format: str | None = None


class ClaidResult(ServiceResponse):
    service: Literal["claid"] = "claid"
    result_url: str
    metadata: ClaidMetadata
    validation: Validation
    image_metadata: ImageMetadata


class CloudinaryValidationResult(ServiceResponse):
    service: Literal["cloudinary"] = "cloudinary"
    result_url: str
    validation: Validation
    metadata: ImageMetadata
    raw_data: dict[str, Any] = Field(default_factory=dict)


class SearchMetadata(ApiModel):
    status: str
    image_url: str
    processed_at: str


class ProductRecognitionResult(ServiceResponse, ProductRecognition):
    service: Literal["product_recognition"] = "product_recognition"
    search_metadata: SearchMetadata


# Routes declare their own variant; clients decode any success body with
# TypeAdapter(ServiceResult).
ServiceResult = Annotated[
    Union[
        RemoveBgResult,
        MeshyResult,
        VisionResult,
        GoogleCloudResult,
        ClaidResult,
        CloudinaryValidationResult,
        ProductRecognitionResult,
    ],
    Field(discriminator="service"),
]


class VendorStatus(ApiModel):
    status: Literal["ok"] = "ok"
    vendors: dict[str, bool]


class ProductRecognitionInfo(ApiModel):
    service: str = "Product Recognition API"
    status: str
    endpoints: dict[str, Any]
    configuration: dict[str, Any]


__all__ = [
    "ClaidMetadata",
    "ClaidResult",
    "CloudinaryValidationResult",
    "ErrorResponse",
    "GoogleCloudResult",
    "MeshyResult",
    "ProductRecognitionInfo",
    "ProductRecognitionResult",
    "RemoveBgResult",
    "SearchMetadata",
    "ServiceResponse",
    "ServiceResult",
    "VendorStatus",
    "VisionResult",
]
