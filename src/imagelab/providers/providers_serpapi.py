"""SerpAPI Google Lens driver."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi import status

from ..exceptions import UpstreamError, VendorTimeoutError
from ..logging import truncate
from .providers_base import VendorDriver, is_success, translate_http_errors

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; ProductRecognition/1.0)"
INVALID_KEY_MARKERS = ("invalid api key", "invalid api_key", "invalid serpapi key")


def classify_search_error(message: str) -> UpstreamError:
    """Map a SerpAPI failure message onto the user facing error."""

    lowered = message.lower()
    if any(marker in lowered for marker in INVALID_KEY_MARKERS):
        return UpstreamError(
            "Invalid API key",
            details="Please check your SerpAPI key configuration.",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    if "quota" in lowered or "limit" in lowered:
        return UpstreamError(
            "API limit reached",
            details="You may have exceeded your API request limit.",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )
    return UpstreamError(
        "Failed to process image",
        details=message,
        suggestion="Check your API keys and ensure the image is accessible.",
    )


@dataclass(slots=True)
class SerpApiDriver(VendorDriver):
    """Run a Google Lens visual search for a public image URL."""

    api_endpoint: str = "https://serpapi.com/search.json"
    log: logging.Logger = field(default_factory=lambda: logger)

    vendor_name = "SerpAPI"

    @property
    def timeout(self) -> float:
        return self.timeout_seconds or self.config.serpapi_timeout_seconds

    async def search(self, image_url: str) -> dict[str, Any]:
        api_key = self._require(
            self.config.serpapi_key,
            "SerpAPI key not configured. Please check your environment variables.",
        )
        params = {"engine": "google_lens", "api_key": api_key, "url": image_url, "hl": "en"}
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}

        try:
            async with asyncio.timeout(self.timeout):
                with translate_http_errors(self.vendor_name, timeout=self.timeout):
                    async with self._client() as client:
                        response = await client.get(
                            self.api_endpoint, params=params, headers=headers
                        )
        except TimeoutError as exc:
            self.log.warning("serpapi.request.timeout", extra={"timeout": self.timeout})
            raise VendorTimeoutError(self.vendor_name, timeout_seconds=self.timeout) from exc
        except VendorTimeoutError:
            self.log.warning("serpapi.request.timeout", extra={"timeout": self.timeout})
            raise
        except UpstreamError as exc:
            raise classify_search_error(exc.message) from exc

        self.log.info("serpapi.response.status", extra={"status_code": response.status_code})
        text = response.text or ""
        if not is_success(response):
            self.log.error("serpapi.response.error %s", truncate(text))
            raise classify_search_error(_failure_message(response.status_code, text))

        try:
            data = json.loads(text)
        except ValueError as exc:
            self.log.error("serpapi.response.invalid_json %s", truncate(text, 200))
            raise classify_search_error("Invalid response from SerpAPI") from exc
        if not isinstance(data, dict):
            raise classify_search_error("Invalid response from SerpAPI")
        if data.get("error"):
            raise classify_search_error(str(data["error"]))

        metadata = data.get("search_metadata")
        search_status = metadata.get("status") if isinstance(metadata, dict) else None
        if search_status != "Success":
            self.log.warning("serpapi.search.incomplete", extra={"status": search_status})
        matches = data.get("visual_matches")
        self.log.info(
            "serpapi.search.success",
            extra={"visual_matches": len(matches) if isinstance(matches, list) else 0},
        )
        return data


def _failure_message(status_code: int, text: str) -> str:
    try:
        body = json.loads(text)
    except ValueError:
        if "Invalid API key" in text:
            return "Invalid SerpAPI key. Please check your API key."
        return f"SerpAPI request failed with status {status_code}"
    if isinstance(body, dict) and body.get("error"):
        return f"SerpAPI Error: {body['error']}"
    return f"SerpAPI request failed with status {status_code}"


__all__ = ["SerpApiDriver", "classify_search_error"]
