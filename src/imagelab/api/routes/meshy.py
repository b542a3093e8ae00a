"""Image-to-3D route backed by the Meshy create/poll lifecycle."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ...providers.providers_factory import ProviderRegistry
from ...schemas.requests import ImageRequest
from ...schemas.results import MeshyResult
from .dependencies import get_providers

router = APIRouter(prefix="/api", tags=["Meshy"])


@router.post(
    "/meshy",
    response_model=MeshyResult,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def image_to_3d(
    payload: ImageRequest,
    providers: Annotated[ProviderRegistry, Depends(get_providers)],
) -> MeshyResult:
    """Create a 3D model; answers ``PENDING`` with the task id when polling runs out."""

    return await providers.meshy.image_to_3d(payload.image_reference())


__all__ = ["router", "image_to_3d"]
