"""Image references accepted by every processing endpoint."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from ..exceptions import InputError

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)
_PREFIX_RE = re.compile(r"^data:[\w.+-]+/[\w.+-]+;base64,")

DEFAULT_MIME_TYPE = "image/png"


def is_data_url(value: str) -> bool:
    return value.startswith("data:")


def strip_data_url_prefix(value: str) -> str:
    """Drop a ``data:<mime>;base64,`` prefix when present."""
    return _PREFIX_RE.sub("", value, count=1)


def is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


@dataclass(slots=True, frozen=True)
class ImageReference:
    """Either a dereferenceable URL or an inline base64 data URL."""

    url: str | None = None
    data_url: str | None = None

    @classmethod
    def from_request(
        cls, image_url: str | None, image_base64: str | None
    ) -> "ImageReference":
        """Build a reference from request fields; the URL wins when both are set."""

        if image_url:
            return cls(url=image_url)
        if image_base64:
            return cls(data_url=image_base64)
        raise InputError("Image URL or base64 is required")

    @property
    def is_inline(self) -> bool:
        return self.data_url is not None

    @property
    def source(self) -> str:
        """The raw value forwarded to vendors that accept both forms."""
        return self.url if self.url is not None else self.data_url or ""

    @property
    def mime_type(self) -> str:
        if self.data_url is None:
            return DEFAULT_MIME_TYPE
        match = _DATA_URL_RE.match(self.data_url)
        return match.group("mime") if match else DEFAULT_MIME_TYPE

    @property
    def raw_base64(self) -> str:
        """Base64 payload without its data URL prefix."""
        if self.data_url is None:
            raise InputError("Image reference does not carry inline data")
        return strip_data_url_prefix(self.data_url)

    def decode(self) -> bytes:
        try:
            return base64.b64decode(self.raw_base64, validate=False)
        except (binascii.Error, ValueError) as exc:
            raise InputError(
                "Invalid base64 image payload", details=str(exc)
            ) from exc


__all__ = [
    "DEFAULT_MIME_TYPE",
    "ImageReference",
    "is_data_url",
    "is_http_url",
    "strip_data_url_prefix",
]
