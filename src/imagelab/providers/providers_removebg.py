"""Remove.bg background removal driver."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field

from ..media import ImageReference
from .providers_base import VendorDriver, raise_for_vendor_status, translate_http_errors

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RemoveBgDriver(VendorDriver):
    """Call Remove.bg and return the cut-out as a PNG data URL."""

    api_endpoint: str = "https://api.remove.bg/v1.0/removebg"
    log: logging.Logger = field(default_factory=lambda: logger)

    vendor_name = "Remove.bg"

    async def remove_background(self, image: ImageReference) -> str:
        api_key = self._require(
            self.config.remove_bg_api_key, "Remove.bg API key not configured"
        )
        form = {"size": "auto"}
        if image.is_inline:
            form["image_file_b64"] = image.raw_base64
        else:
            form["image_url"] = image.source

        with translate_http_errors(self.vendor_name, timeout=self.timeout):
            async with self._client() as client:
                response = await client.post(
                    self.api_endpoint, headers={"X-Api-Key": api_key}, data=form
                )
        raise_for_vendor_status(response, self.vendor_name)

        encoded = base64.b64encode(response.content).decode("ascii")
        self.log.info(
            "removebg.request.success", extra={"result_bytes": len(response.content)}
        )
        return f"data:image/png;base64,{encoded}"


__all__ = ["RemoveBgDriver"]
