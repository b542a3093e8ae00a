"""Reverse image product search routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ...schemas.requests import ProductRecognitionRequest
from ...schemas.results import ProductRecognitionInfo, ProductRecognitionResult
from ...services import ProductRecognitionService
from .dependencies import get_product_recognition_service

router = APIRouter(prefix="/api", tags=["Product recognition"])

ServiceDep = Annotated[ProductRecognitionService, Depends(get_product_recognition_service)]


@router.post(
    "/product-recognition",
    response_model=ProductRecognitionResult,
    status_code=status.HTTP_200_OK,
)
async def recognize_product(
    payload: ProductRecognitionRequest, service: ServiceDep
) -> ProductRecognitionResult:
    return await service.recognize(payload.image_reference())


@router.get(
    "/product-recognition",
    response_model=ProductRecognitionInfo,
    status_code=status.HTTP_200_OK,
)
async def describe_product_recognition(service: ServiceDep) -> ProductRecognitionInfo:
    """Report whether SerpAPI and the Cloudinary upload relay are configured."""

    return service.info()


__all__ = ["router", "describe_product_recognition", "recognize_product"]
