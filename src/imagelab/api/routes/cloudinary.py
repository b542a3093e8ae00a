"""CDN transformation validation route."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ...schemas.requests import CloudinaryValidateRequest
from ...schemas.results import CloudinaryValidationResult
from ...services import CloudinaryValidationService, PublicUrlResolver
from .dependencies import get_public_url_resolver, get_validation_service

router = APIRouter(prefix="/api", tags=["Cloudinary"])


@router.post(
    "/cloudinary-validate",
    response_model=CloudinaryValidationResult,
    status_code=status.HTTP_200_OK,
)
async def validate_image(
    payload: CloudinaryValidateRequest,
    service: Annotated[CloudinaryValidationService, Depends(get_validation_service)],
    resolver: Annotated[PublicUrlResolver, Depends(get_public_url_resolver)],
) -> CloudinaryValidationResult:
    image_url = payload.image_url
    if not image_url and payload.image_base64:
        image_url = await resolver.resolve(payload.image_reference())
    return await service.validate(image_url, payload.operations)


__all__ = ["router", "validate_image"]
