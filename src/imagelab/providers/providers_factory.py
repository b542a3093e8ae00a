"""Factory for vendor drivers."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import AppConfig
from .providers_claid import ClaidDriver
from .providers_cloudinary import CloudinaryClient
from .providers_meshy import MeshyDriver
from .providers_removebg import RemoveBgDriver
from .providers_serpapi import SerpApiDriver
from .providers_vision import GoogleCloudDriver, GoogleVisionDriver


@dataclass(slots=True)
class ProviderRegistry:
    """One driver instance per vendor, shared by all requests."""

    removebg: RemoveBgDriver
    meshy: MeshyDriver
    vision: GoogleVisionDriver
    google_cloud: GoogleCloudDriver
    claid: ClaidDriver
    cloudinary: CloudinaryClient
    serpapi: SerpApiDriver

    @classmethod
    def from_config(cls, config: AppConfig) -> "ProviderRegistry":
        return cls(
            removebg=RemoveBgDriver(config=config),
            meshy=MeshyDriver(config=config),
            vision=GoogleVisionDriver(config=config),
            google_cloud=GoogleCloudDriver(config=config),
            claid=ClaidDriver(config=config),
            cloudinary=CloudinaryClient(config=config),
            serpapi=SerpApiDriver(config=config),
        )


__all__ = ["ProviderRegistry"]
