"""Background removal route."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ...providers.providers_factory import ProviderRegistry
from ...schemas.requests import ImageRequest
from ...schemas.results import RemoveBgResult
from .dependencies import get_providers

router = APIRouter(prefix="/api", tags=["Remove.bg"])


@router.post(
    "/remove-bg",
    response_model=RemoveBgResult,
    status_code=status.HTTP_200_OK,
)
async def remove_background(
    payload: ImageRequest,
    providers: Annotated[ProviderRegistry, Depends(get_providers)],
) -> RemoveBgResult:
    """Cut the subject out and return it as a PNG data URL."""

    result_url = await providers.removebg.remove_background(payload.image_reference())
    return RemoveBgResult(result_url=result_url)


__all__ = ["router", "remove_background"]
