"""Project vendor image metadata onto :class:`NormalizedResult`.

Scoring heuristics (e-commerce oriented):

* running score starts at ``0.8`` and is clamped to ``[0.3, 0.95]``;
* non-square images (ratio outside ``[0.95, 1.05]``) lose ``0.10``;
* images below 800x800 lose ``0.15`` (``high``);
* files that are empty or at least 5 MiB lose ``0.05`` (``medium``), or
  ``0.15`` (``high``) above 10 MiB;
* formats outside jpg/jpeg/png/webp/gif lose ``0.10``;
* native focus below 0.5 loses ``0.10``, native noise above 0.7 loses ``0.05``;
* palettes above 20 colours are reported without a penalty.

Compliance passes when at least 75% of the four checks pass.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from .models import (
    Compliance,
    ComplianceCheck,
    ImageMetadata,
    Issue,
    NormalizedResult,
    QualityReport,
    Severity,
    Validation,
)

BASE_SCORE = 0.8
MIN_SCORE = 0.3
MAX_SCORE = 0.95
MIN_DIMENSION = 800
OPTIMIZED_SIZE_BYTES = 5 * 1024 * 1024
OVERSIZED_BYTES = 10 * 1024 * 1024
WEB_FORMATS = frozenset({"jpg", "jpeg", "png", "webp", "gif"})
MAX_PALETTE_COLORS = 20
COMPLIANCE_THRESHOLD = 0.75

_SEVERITY_PENALTY = {Severity.HIGH: 0.15, Severity.MEDIUM: 0.05}


def _number(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # Integers past the float range cannot be measured.
        return 0
    return value if finite else 0


def format_size(size: int | float) -> str:
    """Render a byte count with a binary unit suffix."""
    if not size:
        return "0 B"
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    if size < 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MB"
    return f"{size / (1024 * 1024 * 1024):.2f} GB"


def analyze_image_metadata(
    raw: Mapping[str, Any] | None, *, result_url: str | None = None
) -> NormalizedResult:
    """Score ``raw`` metadata and build compliance checks; never raises."""

    raw = raw if isinstance(raw, Mapping) else {}
    width = _number(raw.get("width"))
    height = _number(raw.get("height"))
    fmt = raw.get("format")
    fmt = fmt.lower() if isinstance(fmt, str) else ""
    file_size = _number(raw.get("bytes"))
    aspect_ratio = width / height if width and height else 0.0

    native = raw.get("quality_analysis")
    native = dict(native) if isinstance(native, Mapping) else {}
    colors = raw.get("colors")
    colors = list(colors) if isinstance(colors, list) else []

    score = BASE_SCORE
    issues: list[Issue] = []

    is_square = 0.95 <= aspect_ratio <= 1.05
    if not is_square:
        issues.append(
            Issue(
                type="composition",
                severity=Severity.MEDIUM,
                message=(
                    f"Aspect ratio {aspect_ratio:.2f}:1 - not square "
                    "(e-commerce standard is 1:1)"
                ),
                suggestion="Crop to square format for better display",
            )
        )
        score -= 0.1

    is_standard_size = width >= MIN_DIMENSION and height >= MIN_DIMENSION
    if not is_standard_size:
        severity = (
            Severity.HIGH
            if width < MIN_DIMENSION or height < MIN_DIMENSION
            else Severity.MEDIUM
        )
        issues.append(
            Issue(
                type="dimensions",
                severity=severity,
                message=(
                    f"Dimensions {width}x{height}px - below recommended "
                    f"{MIN_DIMENSION}x{MIN_DIMENSION} minimum"
                ),
                suggestion=f"Resize to at least {MIN_DIMENSION}x{MIN_DIMENSION} pixels",
            )
        )
        score -= _SEVERITY_PENALTY[severity]

    is_optimized_size = 0 < file_size < OPTIMIZED_SIZE_BYTES
    if not is_optimized_size:
        oversized = file_size > OVERSIZED_BYTES
        severity = Severity.HIGH if oversized else Severity.MEDIUM
        verdict = "too large" if oversized else "could be optimized"
        issues.append(
            Issue(
                type="size",
                severity=severity,
                message=f"File size {format_size(file_size)} - {verdict}",
                suggestion="Compress image for web delivery",
            )
        )
        score -= _SEVERITY_PENALTY[severity]

    is_web_friendly = fmt in WEB_FORMATS
    if not is_web_friendly:
        issues.append(
            Issue(
                type="format",
                severity=Severity.MEDIUM,
                message=f"Format {fmt.upper()} - not optimal for web",
                suggestion="Convert to WebP or JPEG format",
            )
        )
        score -= 0.1

    focus = native.get("focus")
    if _is_score(focus) and focus < 0.5:
        issues.append(
            Issue(
                type="quality",
                severity=Severity.MEDIUM,
                message="Image may be out of focus or blurry",
                suggestion="Use a sharper image for better product presentation",
            )
        )
        score -= 0.1

    noise = native.get("noise")
    if _is_score(noise) and noise > 0.7:
        issues.append(
            Issue(
                type="quality",
                severity=Severity.LOW,
                message="High noise detected in image",
                suggestion="Consider using a cleaner source image",
            )
        )
        score -= 0.05

    if len(colors) > MAX_PALETTE_COLORS:
        issues.append(
            Issue(
                type="colors",
                severity=Severity.LOW,
                message=f"Complex color palette ({len(colors)} colors)",
                suggestion="Consider simplifying colors for better loading",
            )
        )

    score = max(MIN_SCORE, min(MAX_SCORE, score))

    checks = [
        ComplianceCheck(
            check="Square format (1:1 ratio)",
            passed=is_square,
            details="✓ Perfect" if is_square else f"{aspect_ratio:.2f}:1 ratio",
        ),
        ComplianceCheck(
            check="Minimum dimensions (800x800px)",
            passed=is_standard_size,
            details="✓ Good" if is_standard_size else f"{width}x{height}px",
        ),
        ComplianceCheck(
            check="Web-optimized format",
            passed=is_web_friendly,
            details=(
                fmt.upper() if is_web_friendly else f"{fmt.upper()} (use WebP/JPEG)"
            ),
        ),
        ComplianceCheck(
            check="File size optimization",
            passed=is_optimized_size,
            details=(
                format_size(file_size)
                if is_optimized_size
                else f"{format_size(file_size)} (too large)"
            ),
        ),
    ]

    return NormalizedResult(
        result_url=result_url,
        validation=Validation(
            quality=QualityReport(score=score, issues=issues, native_analysis=native),
            compliance=compliance_from_checks(checks),
        ),
        metadata=ImageMetadata(
            width=width,
            height=height,
            format=fmt,
            file_size=file_size,
            aspect_ratio=round(aspect_ratio, 2),
            colors=colors[:5],
            resource_type=_optional_str(raw.get("resource_type")),
            created_at=_optional_str(raw.get("created_at")),
            url=_optional_str(raw.get("secure_url")),
        ),
    )


def compliance_from_checks(checks: list[ComplianceCheck]) -> Compliance:
    """Aggregate checks; passes when the passing share reaches the threshold."""
    passed = sum(1 for check in checks if check.passed)
    required = math.ceil(len(checks) * COMPLIANCE_THRESHOLD)
    return Compliance(passed=passed >= required, checks=checks)


def _is_score(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and math.isfinite(value))


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


__all__ = [
    "analyze_image_metadata",
    "compliance_from_checks",
    "format_size",
]
