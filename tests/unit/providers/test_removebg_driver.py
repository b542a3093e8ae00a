from __future__ import annotations

import base64

import pytest

from src.imagelab.exceptions import ConfigurationError, UpstreamError
from src.imagelab.media import ImageReference
from src.imagelab.providers.providers_removebg import RemoveBgDriver
from tests.helpers.http import DummyHTTPResponse, configure_httpx

pytestmark = pytest.mark.unit


@pytest.mark.asyncio
async def test_remove_bg_from_url(monkeypatch, config):
    calls = configure_httpx(
        monkeypatch, post_responses=[DummyHTTPResponse(200, content=b"png-bytes")]
    )

    result = await RemoveBgDriver(config=config).remove_background(
        ImageReference(url="https://cdn.example/shoe.jpg")
    )

    assert result == "data:image/png;base64," + base64.b64encode(b"png-bytes").decode()
    _, url, kwargs = calls[0]
    assert url == "https://api.remove.bg/v1.0/removebg"
    assert kwargs["headers"] == {"X-Api-Key": "rbg-key"}
    assert kwargs["data"] == {"size": "auto", "image_url": "https://cdn.example/shoe.jpg"}


@pytest.mark.asyncio
async def test_remove_bg_from_base64_strips_prefix(monkeypatch, config):
    calls = configure_httpx(
        monkeypatch, post_responses=[DummyHTTPResponse(200, content=b"png")]
    )

    await RemoveBgDriver(config=config).remove_background(
        ImageReference(data_url="data:image/jpeg;base64,QUJD")
    )

    assert calls[0][2]["data"] == {"size": "auto", "image_file_b64": "QUJD"}


@pytest.mark.asyncio
async def test_remove_bg_vendor_error(monkeypatch, config):
    configure_httpx(
        monkeypatch,
        post_responses=[
            DummyHTTPResponse(402, {"errors": [{"title": "Insufficient credits"}]})
        ],
    )

    with pytest.raises(UpstreamError) as exc_info:
        await RemoveBgDriver(config=config).remove_background(
            ImageReference(url="https://cdn.example/shoe.jpg")
        )

    assert exc_info.value.status_code == 500
    assert exc_info.value.vendor_status == 402


@pytest.mark.asyncio
async def test_remove_bg_requires_key(monkeypatch, bare_config):
    calls = configure_httpx(monkeypatch)

    with pytest.raises(ConfigurationError) as exc_info:
        await RemoveBgDriver(config=bare_config).remove_background(
            ImageReference(url="https://cdn.example/shoe.jpg")
        )

    assert exc_info.value.message == "Remove.bg API key not configured"
    assert calls == []
