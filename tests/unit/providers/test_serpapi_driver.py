from __future__ import annotations

import asyncio

import httpx
import pytest

from src.imagelab.exceptions import ConfigurationError, UpstreamError, VendorTimeoutError
from src.imagelab.providers.providers_serpapi import SerpApiDriver, classify_search_error
from tests.helpers.http import DummyHTTPResponse, configure_httpx

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("message", "status_code", "error"),
    [
        ("Invalid API key. Your API key should be here", 401, "Invalid API key"),
        ("Invalid SerpAPI key. Please check your API key.", 401, "Invalid API key"),
        ("Your account has run out of searches (quota)", 429, "API limit reached"),
        ("Rate limit exceeded", 429, "API limit reached"),
        ("Google hiccup", 500, "Failed to process image"),
    ],
)
def test_classify_search_error(message, status_code, error) -> None:
    exc = classify_search_error(message)

    assert exc.status_code == status_code
    assert exc.message == error


@pytest.mark.asyncio
async def test_search_success(monkeypatch, config):
    payload = {"search_metadata": {"status": "Success"}, "visual_matches": [{"title": "x"}]}
    calls = configure_httpx(monkeypatch, get_responses=[DummyHTTPResponse(200, payload)])

    data = await SerpApiDriver(config=config).search("https://cdn.example/a.jpg")

    assert data == payload
    _, url, kwargs = calls[0]
    assert url == "https://serpapi.com/search.json"
    assert kwargs["params"] == {
        "engine": "google_lens",
        "api_key": "serp-key",
        "url": "https://cdn.example/a.jpg",
        "hl": "en",
    }


@pytest.mark.asyncio
async def test_search_error_field_is_classified(monkeypatch, config):
    configure_httpx(
        monkeypatch,
        get_responses=[DummyHTTPResponse(200, {"error": "Invalid API key."})],
    )

    with pytest.raises(UpstreamError) as exc_info:
        await SerpApiDriver(config=config).search("https://cdn.example/a.jpg")

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_search_http_error_is_classified(monkeypatch, config):
    configure_httpx(
        monkeypatch,
        get_responses=[DummyHTTPResponse(429, {"error": "Monthly search limit reached"})],
    )

    with pytest.raises(UpstreamError) as exc_info:
        await SerpApiDriver(config=config).search("https://cdn.example/a.jpg")

    assert exc_info.value.status_code == 429


@pytest.mark.asyncio
async def test_search_invalid_json(monkeypatch, config):
    configure_httpx(monkeypatch, get_responses=[DummyHTTPResponse(200, text="<html>")])

    with pytest.raises(UpstreamError) as exc_info:
        await SerpApiDriver(config=config).search("https://cdn.example/a.jpg")

    assert exc_info.value.status_code == 500
    assert exc_info.value.details == "Invalid response from SerpAPI"


@pytest.mark.asyncio
async def test_search_transport_timeout(monkeypatch, config):
    configure_httpx(monkeypatch, get_responses=[httpx.ReadTimeout("slow")])

    with pytest.raises(VendorTimeoutError) as exc_info:
        await SerpApiDriver(config=config).search("https://cdn.example/a.jpg")

    assert exc_info.value.message == "Request timeout"


@pytest.mark.asyncio
async def test_search_total_timeout(monkeypatch, config):
    class SlowClient:
        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc_info):
            return None

        async def get(self, url, **kwargs):
            await asyncio.sleep(1)

    monkeypatch.setattr("httpx.AsyncClient", lambda *args, **kwargs: SlowClient())

    with pytest.raises(VendorTimeoutError):
        await SerpApiDriver(config=config, timeout_seconds=0.01).search("https://cdn.example/a.jpg")


@pytest.mark.asyncio
async def test_search_requires_key(bare_config):
    with pytest.raises(ConfigurationError):
        await SerpApiDriver(config=bare_config).search("https://cdn.example/a.jpg")
