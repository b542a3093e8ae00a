"""Vendor-agnostic result and payload models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Severity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Issue(BaseModel):
    """Single finding produced while scoring image metadata."""

    type: str
    severity: Severity
    message: str
    suggestion: str


class ComplianceCheck(BaseModel):
    check: str
    passed: bool
    details: str


class Compliance(BaseModel):
    passed: bool
    checks: list[ComplianceCheck] = Field(default_factory=list)


class QualityReport(BaseModel):
    score: float = Field(..., ge=0.0, le=1.0)
    issues: list[Issue] = Field(default_factory=list)
    native_analysis: dict[str, Any] = Field(
        default_factory=dict,
        description="Quality analysis block reported by the vendor, if any.",
    )


class Validation(BaseModel):
    quality: QualityReport
    compliance: Compliance


class ImageMetadata(BaseModel):
    width: int | float = 0
    height: int | float = 0
    format: str = ""
    file_size: int | float = 0
    aspect_ratio: float = 0.0
    colors: list[Any] = Field(default_factory=list)
    resource_type: str | None = None
    created_at: str | None = None
    url: str | None = None


class NormalizedResult(BaseModel):
    """Uniform result shape independent of the vendor that produced it."""

    result_url: str | None = None
    validation: Validation
    metadata: ImageMetadata


class Adjustments(BaseModel):
    """Integer adjustment intensities forwarded to the enhancement vendor."""

    hdr: int = 0
    exposure: int = 0
    saturation: int = 0
    contrast: int = 0
    sharpness: int = 0


class RemoveSelection(BaseModel):
    """Background removal target; ``category`` and ``selective`` never coexist."""

    model_config = ConfigDict(extra="allow")

    category: Any = None
    selective: Any = None


class BackgroundOptions(BaseModel):
    model_config = ConfigDict(extra="allow")

    remove: bool | RemoveSelection | None = None
    color: Any = None


class ClaidOperations(BaseModel):
    """Named operation blocks; unknown blocks (padding, privacy...) pass through."""

    model_config = ConfigDict(extra="allow")

    adjustments: Adjustments | None = None
    restorations: dict[str, Any] | None = None
    background: BackgroundOptions | None = None
    resizing: dict[str, Any] | None = None


class ClaidPayload(BaseModel):
    input: str
    operations: ClaidOperations
    output: dict[str, Any]

    def to_request_body(self) -> dict[str, Any]:
        """Serialise only the fields that were actually supplied."""
        return self.model_dump(mode="json", exclude_unset=True)


__all__ = [
    "Adjustments",
    "BackgroundOptions",
    "ClaidOperations",
    "ClaidPayload",
    "Compliance",
    "ComplianceCheck",
    "ImageMetadata",
    "Issue",
    "NormalizedResult",
    "QualityReport",
    "RemoveSelection",
    "Severity",
    "Validation",
]
