"""FastAPI routers, one per vendor service."""

from . import claid, cloudinary, health, meshy, product_recognition, remove_bg, vision

__all__ = [
    "claid",
    "cloudinary",
    "health",
    "meshy",
    "product_recognition",
    "remove_bg",
    "vision",
]
