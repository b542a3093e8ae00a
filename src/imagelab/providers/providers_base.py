"""Shared plumbing for vendor drivers."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..config import AppConfig
from ..exceptions import ConfigurationError, UpstreamError, VendorTimeoutError
from ..logging import truncate

logger = logging.getLogger(__name__)

RAW_EXCERPT_LIMIT = 200
ERROR_MESSAGE_KEYS = ("error_message", "detail", "message", "error")


@dataclass(slots=True)
class VendorDriver:
    """Base for drivers talking to a single vendor HTTP API."""

    config: AppConfig
    timeout_seconds: float | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    vendor_name = "vendor"

    @property
    def timeout(self) -> float:
        return self.timeout_seconds or self.config.vendor_timeout_seconds

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout)

    def _require(self, value: str | None, message: str) -> str:
        if not value:
            self.log.error(
                "%s.config.missing", self.vendor_name, extra={"reason": message}
            )
            raise ConfigurationError(
                message, suggestion="Check your API key configuration."
            )
        return value


def is_success(response: httpx.Response) -> bool:
    return 200 <= response.status_code < 300


def _message_from_body(body: Any) -> str | None:
    if not isinstance(body, Mapping):
        return None
    for key in ERROR_MESSAGE_KEYS:
        value = body.get(key)
        if isinstance(value, Mapping):
            nested = value.get("message")
            if nested:
                return str(nested)
        elif value:
            return str(value)
    return None


def _format_error_details(details: Any) -> str | None:
    if not isinstance(details, Mapping) or not details:
        return None
    parts = []
    for key, value in details.items():
        if isinstance(value, list):
            value = ", ".join(str(item) for item in value)
        parts.append(f"{key}: {value}")
    return "; ".join(parts)


def extract_vendor_error(response: httpx.Response) -> str:
    """Vendor error text from a JSON body, or a truncated raw excerpt."""

    text = response.text or ""
    try:
        body = json.loads(text)
    except ValueError:
        return text[:RAW_EXCERPT_LIMIT]
    message = _message_from_body(body) or text[:RAW_EXCERPT_LIMIT]
    extra = None
    if isinstance(body, Mapping):
        extra = _format_error_details(body.get("error_details"))
    if extra:
        message = f"{message} - {extra}"
    return message


def raise_for_vendor_status(
    response: httpx.Response, vendor: str, *, suggestion: str | None = None
) -> None:
    """Raise :class:`UpstreamError` unless ``response`` is a 2xx reply."""

    if is_success(response):
        return
    detail = extract_vendor_error(response)
    logger.warning(
        "%s.response.error status=%s body_preview=%s",
        vendor.lower(),
        response.status_code,
        truncate(response.text or ""),
    )
    raise UpstreamError(
        f"{vendor} API error: {detail or response.status_code}",
        vendor_status=response.status_code,
        suggestion=suggestion,
    )


@contextmanager
def translate_http_errors(vendor: str, *, timeout: float | None = None) -> Iterator[None]:
    """Translate transport level httpx errors into service errors."""

    try:
        yield
    except httpx.TimeoutException as exc:
        raise VendorTimeoutError(vendor, timeout_seconds=timeout) from exc
    except httpx.HTTPError as exc:
        raise UpstreamError(f"{vendor} request failed: {exc}") from exc


__all__ = [
    "VendorDriver",
    "extract_vendor_error",
    "is_success",
    "raise_for_vendor_status",
    "translate_http_errors",
]
