"""Image reference helpers shared by routes and provider drivers."""

from .image_reference import (
    ImageReference,
    is_data_url,
    is_http_url,
    strip_data_url_prefix,
)

__all__ = [
    "ImageReference",
    "is_data_url",
    "is_http_url",
    "strip_data_url_prefix",
]
