"""Vendor drivers for the image processing proxy."""

from .polling import JobHandle, JobPoller, JobState, JobStatus, PollOutcome
from .providers_base import VendorDriver
from .providers_claid import ClaidDriver
from .providers_cloudinary import CloudinaryClient
from .providers_factory import ProviderRegistry
from .providers_meshy import MeshyDriver
from .providers_removebg import RemoveBgDriver
from .providers_serpapi import SerpApiDriver
from .providers_vision import GoogleCloudDriver, GoogleVisionDriver

__all__ = [
    "ClaidDriver",
    "CloudinaryClient",
    "GoogleCloudDriver",
    "GoogleVisionDriver",
    "JobHandle",
    "JobPoller",
    "JobState",
    "JobStatus",
    "MeshyDriver",
    "PollOutcome",
    "ProviderRegistry",
    "RemoveBgDriver",
    "SerpApiDriver",
    "VendorDriver",
]
