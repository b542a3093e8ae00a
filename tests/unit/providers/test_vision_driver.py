from __future__ import annotations

import base64

import pytest

from src.imagelab.exceptions import ConfigurationError, InputError, UpstreamError
from src.imagelab.media import ImageReference
from src.imagelab.providers.providers_vision import (
    GoogleCloudDriver,
    GoogleVisionDriver,
    estimate_compressed_size,
    savings_label,
)
from tests.helpers.http import DummyHTTPResponse, configure_httpx

pytestmark = pytest.mark.unit

PIXELS = b"\x89PNG" + b"\x00" * 996
INLINE = ImageReference(data_url="data:image/png;base64," + base64.b64encode(PIXELS).decode())
PROPERTIES_OK = DummyHTTPResponse(200, {"responses": [{"imagePropertiesAnnotation": {}}]})


@pytest.mark.asyncio
async def test_vision_annotate_url(monkeypatch, config):
    calls = configure_httpx(
        monkeypatch,
        post_responses=[
            DummyHTTPResponse(
                200,
                {
                    "responses": [
                        {
                            "labelAnnotations": [{"description": "Shoe", "score": 0.97}],
                            "localizedObjectAnnotations": [{"name": "Shoe"}],
                        }
                    ]
                },
            )
        ],
    )

    result = await GoogleVisionDriver(config=config).annotate(
        ImageReference(url="https://cdn.example/shoe.jpg"),
        ["LABEL_DETECTION", "OBJECT_LOCALIZATION"],
    )

    assert result.labels == [{"description": "Shoe", "score": 0.97}]
    assert result.objects == [{"name": "Shoe"}]
    assert result.text == [] and result.faces == []
    _, _, kwargs = calls[0]
    assert kwargs["params"] == {"key": "gcp-key"}
    request = kwargs["json"]["requests"][0]
    assert request["image"] == {"source": {"imageUri": "https://cdn.example/shoe.jpg"}}
    assert request["features"][0] == {"type": "LABEL_DETECTION", "maxResults": 10}


@pytest.mark.asyncio
async def test_vision_annotate_inline_sends_raw_base64(monkeypatch, config):
    calls = configure_httpx(
        monkeypatch, post_responses=[DummyHTTPResponse(200, {"responses": [{}]})]
    )

    await GoogleVisionDriver(config=config).annotate(INLINE, ["TEXT_DETECTION"])

    image = calls[0][2]["json"]["requests"][0]["image"]
    assert image == {"content": INLINE.raw_base64}


@pytest.mark.asyncio
async def test_vision_requires_key(bare_config):
    with pytest.raises(ConfigurationError):
        await GoogleVisionDriver(config=bare_config).annotate(INLINE, ["LABEL_DETECTION"])


def test_compression_estimate() -> None:
    assert estimate_compressed_size(1000, 80, "webp") == 560
    assert estimate_compressed_size(1000, 80, "jpeg") == 680
    assert estimate_compressed_size(1000, 50, "png") == 500
    assert savings_label(1000, 560) == "44%"
    assert savings_label(0, 0) == "0%"


@pytest.mark.asyncio
async def test_google_cloud_compress(monkeypatch, config):
    configure_httpx(monkeypatch, post_responses=[PROPERTIES_OK])

    result = await GoogleCloudDriver(config=config).run(
        INLINE, "compress", {"quality": 80, "format": "webp"}
    )

    assert result.operation == "compress"
    assert result.original_size == 1000
    assert result.new_size == 560
    assert result.savings == "44%"
    assert result.result_url == INLINE.data_url


@pytest.mark.asyncio
async def test_google_cloud_resize_downloads_url_images(monkeypatch, config):
    calls = configure_httpx(
        monkeypatch,
        post_responses=[PROPERTIES_OK],
        get_responses=[
            DummyHTTPResponse(
                200, content=PIXELS, headers={"content-type": "image/jpeg; charset=binary"}
            )
        ],
    )

    result = await GoogleCloudDriver(config=config).run(
        ImageReference(url="https://cdn.example/a.jpg"), "resize", {"width": 640}
    )

    assert calls[0][0] == "GET"
    assert result.result_url.startswith("data:image/jpeg;base64,")
    assert result.dimensions == {"width": 640, "height": "auto"}


@pytest.mark.asyncio
async def test_google_cloud_lifestyle_requires_project(monkeypatch):
    from tests.helpers.config import make_config

    with pytest.raises(ConfigurationError):
        await GoogleCloudDriver(config=make_config(google_cloud_project_id=None)).run(
            INLINE, "lifestyle"
        )


@pytest.mark.asyncio
async def test_google_cloud_lifestyle_placeholder(monkeypatch, config):
    calls = configure_httpx(monkeypatch)

    result = await GoogleCloudDriver(config=config).run(INLINE, "lifestyle", {"style": "rustic"})

    assert result.style == "rustic"
    assert result.prompt == "Product lifestyle image"
    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("operation", "options"), [("sharpen", {}), (None, {}), ("resize", {})]
)
async def test_google_cloud_rejects_bad_operations(config, operation, options):
    with pytest.raises(InputError):
        await GoogleCloudDriver(config=config).run(INLINE, operation, options)


@pytest.mark.asyncio
async def test_google_cloud_property_check_failure(monkeypatch, config):
    configure_httpx(
        monkeypatch,
        post_responses=[DummyHTTPResponse(403, {"error": {"message": "API disabled"}})],
    )

    with pytest.raises(UpstreamError) as exc_info:
        await GoogleCloudDriver(config=config).run(INLINE, "compress", {})

    assert exc_info.value.message == "Compression analysis failed: API disabled"
    assert exc_info.value.status_code == 500
