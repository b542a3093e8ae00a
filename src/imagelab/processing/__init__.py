"""Pure request sanitizing and response normalizing functions."""

from .normalizer import analyze_image_metadata, format_size
from .product_search import process_product_info
from .sanitizer import build_claid_payload, sanitize_operations
from .transformations import build_transformation_url, build_transformations

__all__ = [
    "analyze_image_metadata",
    "build_claid_payload",
    "build_transformation_url",
    "build_transformations",
    "format_size",
    "process_product_info",
    "sanitize_operations",
]
