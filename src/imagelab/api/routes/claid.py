"""Claid enhancement route."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ...providers.providers_factory import ProviderRegistry
from ...schemas.requests import ClaidRequest
from ...schemas.results import ClaidResult
from ...services import PublicUrlResolver
from .dependencies import get_providers, get_public_url_resolver

router = APIRouter(prefix="/api", tags=["Claid"])


@router.post(
    "/claid",
    response_model=ClaidResult,
    status_code=status.HTTP_200_OK,
)
async def enhance_image(
    payload: ClaidRequest,
    providers: Annotated[ProviderRegistry, Depends(get_providers)],
    resolver: Annotated[PublicUrlResolver, Depends(get_public_url_resolver)],
) -> ClaidResult:
    """Sanitize the requested operations, run them on Claid and score the output.

    Inline images are relayed through Cloudinary first because Claid only
    fetches images by URL.
    """

    image_url = payload.image_url
    if not image_url and payload.image_base64:
        image_url = await resolver.resolve(payload.image_reference(), direct=True)
    return await providers.claid.edit(image_url, payload.operations, payload.output)


__all__ = ["router", "enhance_image"]
