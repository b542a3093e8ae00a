"""Turn inline images into URLs that vendors can fetch themselves."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from ..media import ImageReference
from ..providers.providers_cloudinary import CloudinaryClient, attachment_url

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class PublicUrlResolver:
    """Relay base64 images through the Cloudinary unsigned upload preset."""

    cloudinary: CloudinaryClient
    log: Any = field(default_factory=lambda: logger)

    async def resolve(self, image: ImageReference, *, direct: bool = False) -> str:
        """Return ``image`` as a public URL, uploading inline data first.

        ``direct`` asks for the ``fl_attachment`` delivery variant, which
        serves the stored bytes without any CDN transformation.
        """

        if not image.is_inline:
            return image.source
        secure_url = await self.cloudinary.upload_unsigned(image.source)
        self.log.info("public_url.uploaded", direct=direct)
        return attachment_url(secure_url) if direct else secure_url


__all__ = ["PublicUrlResolver"]
