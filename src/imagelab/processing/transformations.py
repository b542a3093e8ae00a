"""Cloudinary delivery URL transformation strings."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

DELIVERY_BASE_URL = "https://res.cloudinary.com"
DEFAULT_BOUND = 1200

_PUBLIC_ID_RE = re.compile(r"upload/(?:v\d+/)?([^.]+)")


def build_transformations(operations: Mapping[str, Any] | None) -> list[str]:
    """Return ordered transformation codes for the requested operations."""

    operations = operations if isinstance(operations, Mapping) else {}
    transformations: list[str] = []

    if operations.get("resize") or operations.get("crop"):
        resize = operations.get("resize")
        resize = resize if isinstance(resize, Mapping) else {}
        width = resize.get("width") or DEFAULT_BOUND
        height = resize.get("height") or DEFAULT_BOUND
        crop = "fill" if operations.get("crop") else "fit"
        transformations.extend([f"c_{crop}", f"w_{width}", f"h_{height}"])

    quality = operations.get("quality")
    transformations.append(f"q_{quality}" if quality else "q_auto:good")

    fmt = operations.get("format")
    transformations.append(f"f_{fmt}" if fmt else "f_auto")

    background = operations.get("background")
    if background == "remove":
        transformations.append("e_background_removal")
    if background == "white":
        transformations.append("b_white")

    return transformations


def build_transformation_url(
    cloud_name: str, public_id: str, operations: Mapping[str, Any] | None
) -> str:
    transform = ",".join(build_transformations(operations))
    return f"{DELIVERY_BASE_URL}/{cloud_name}/image/upload/{transform}/{public_id}"


def is_cloudinary_url(url: str) -> bool:
    return "cloudinary.com" in url


def extract_public_id(url: str) -> str:
    """Public id of a Cloudinary delivery URL, or ``""`` when absent."""
    match = _PUBLIC_ID_RE.search(url)
    return match.group(1) if match else ""


__all__ = [
    "build_transformation_url",
    "build_transformations",
    "extract_public_id",
    "is_cloudinary_url",
]
