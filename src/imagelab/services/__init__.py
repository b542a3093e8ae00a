"""Request level services composed from several vendor drivers."""

from .cloudinary_validation import CloudinaryValidationService
from .product_recognition import ProductRecognitionService
from .public_url import PublicUrlResolver

__all__ = [
    "CloudinaryValidationService",
    "ProductRecognitionService",
    "PublicUrlResolver",
]
