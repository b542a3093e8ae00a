"""HTTP surface of the image processing proxy."""

from .facade import ApiFacade

__all__ = ["ApiFacade"]
