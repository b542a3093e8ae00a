"""Dependencies resolving configuration and drivers from application state."""

from __future__ import annotations

from fastapi import Request

from ...config import AppConfig
from ...providers.providers_factory import ProviderRegistry
from ...services import (
    CloudinaryValidationService,
    ProductRecognitionService,
    PublicUrlResolver,
)


def get_app_config(request: Request) -> AppConfig:
    """Return the application configuration from FastAPI state."""

    config = getattr(request.app.state, "config", None)
    if not isinstance(config, AppConfig):  # pragma: no cover - defensive branch
        raise RuntimeError("application configuration is not initialised")
    return config


def get_providers(request: Request) -> ProviderRegistry:
    """Return the provider registry stored on the application state."""

    providers = getattr(request.app.state, "providers", None)
    if not isinstance(providers, ProviderRegistry):
        raise RuntimeError("provider registry is not initialised")
    return providers


def get_public_url_resolver(request: Request) -> PublicUrlResolver:
    return PublicUrlResolver(cloudinary=get_providers(request).cloudinary)


def get_validation_service(request: Request) -> CloudinaryValidationService:
    return CloudinaryValidationService(cloudinary=get_providers(request).cloudinary)


def get_product_recognition_service(request: Request) -> ProductRecognitionService:
    providers = get_providers(request)
    return ProductRecognitionService(
        serpapi=providers.serpapi, cloudinary=providers.cloudinary
    )


__all__ = [
    "get_app_config",
    "get_product_recognition_service",
    "get_providers",
    "get_public_url_resolver",
    "get_validation_service",
]
