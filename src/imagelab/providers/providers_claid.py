"""Claid.ai image edit driver."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import InputError, UpstreamError
from ..processing.normalizer import analyze_image_metadata
from ..processing.sanitizer import build_claid_payload
from ..schemas.results import ClaidMetadata, ClaidResult
from .providers_base import VendorDriver, raise_for_vendor_status, translate_http_errors

logger = logging.getLogger(__name__)

MEGAPIXEL = 1_000_000


def _megapixels_to_pixels(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value * MEGAPIXEL


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


@dataclass(slots=True)
class ClaidDriver(VendorDriver):
    """Forward sanitized edit operations to Claid and score the output."""

    api_endpoint: str = "https://api.claid.ai/v1/image/edit"
    log: logging.Logger = field(default_factory=lambda: logger)

    vendor_name = "Claid"

    async def edit(
        self,
        image_url: str | None,
        operations: Any = None,
        output: Mapping[str, Any] | None = None,
    ) -> ClaidResult:
        if not image_url:
            raise InputError("Image URL is required")
        api_key = self._require(self.config.claid_api_key, "Claid API key not configured")

        payload = build_claid_payload(image_url, operations, output)
        body = payload.to_request_body()
        self.log.info("claid.request.payload %s", json.dumps(body, ensure_ascii=False))

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        with translate_http_errors(self.vendor_name, timeout=self.timeout):
            async with self._client() as client:
                response = await client.post(self.api_endpoint, headers=headers, json=body)
        raise_for_vendor_status(response, self.vendor_name)

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError("Claid API returned an unreadable response") from exc
        data = _section(data, "data") if isinstance(data, Mapping) else {}
        vendor_input = _section(data, "input")
        vendor_output = _section(data, "output")

        result_url = vendor_output.get("tmp_url")
        fmt = vendor_output.get("format")
        if not result_url:
            raise UpstreamError("Claid API did not return a processed image URL")

        normalized = analyze_image_metadata(
            {
                "width": vendor_output.get("width"),
                "height": vendor_output.get("height"),
                "format": fmt,
                "bytes": vendor_output.get("bytes"),
            },
            result_url=result_url,
        )
        self.log.info(
            "claid.request.success",
            extra={"score": normalized.validation.quality.score},
        )
        return ClaidResult(
            result_url=result_url,
            metadata=ClaidMetadata(
                original_size=_megapixels_to_pixels(vendor_input.get("mps")),
                new_size=_megapixels_to_pixels(vendor_output.get("mps")),
                width=_int_or_none(vendor_output.get("width")),
                height=_int_or_none(vendor_output.get("height")),
                format=fmt if isinstance(fmt, str) else None,
            ),
            validation=normalized.validation,
            image_metadata=normalized.metadata,
        )


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


__all__ = ["ClaidDriver"]
