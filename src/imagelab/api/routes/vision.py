"""Google Vision and Google Cloud placeholder routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ...providers.providers_factory import ProviderRegistry
from ...schemas.requests import GoogleCloudRequest, VisionRequest
from ...schemas.results import GoogleCloudResult, VisionResult
from .dependencies import get_providers

router = APIRouter(prefix="/api", tags=["Google"])


@router.post(
    "/google-vision",
    response_model=VisionResult,
    status_code=status.HTTP_200_OK,
)
async def annotate_image(
    payload: VisionRequest,
    providers: Annotated[ProviderRegistry, Depends(get_providers)],
) -> VisionResult:
    return await providers.vision.annotate(payload.image_reference(), payload.features)


@router.post(
    "/google-cloud",
    response_model=GoogleCloudResult,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def google_cloud_operation(
    payload: GoogleCloudRequest,
    providers: Annotated[ProviderRegistry, Depends(get_providers)],
) -> GoogleCloudResult:
    """Run ``resize``, ``lifestyle`` or ``compress`` against the image."""

    return await providers.google_cloud.run(
        payload.image_reference(), payload.operation, payload.options
    )


__all__ = ["router", "annotate_image", "google_cloud_operation"]
