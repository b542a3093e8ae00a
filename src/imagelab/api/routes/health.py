"""Liveness probe with per-vendor configuration flags."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ...config import AppConfig
from ...schemas.results import VendorStatus
from .dependencies import get_app_config

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health", response_model=VendorStatus, status_code=status.HTTP_200_OK)
async def health(config: Annotated[AppConfig, Depends(get_app_config)]) -> VendorStatus:
    return VendorStatus(vendors=config.vendor_flags())


__all__ = ["router", "health"]
