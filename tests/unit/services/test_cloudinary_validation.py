from __future__ import annotations

import pytest

from src.imagelab.exceptions import ConfigurationError, InputError, NotFoundError
from src.imagelab.providers.providers_cloudinary import CloudinaryClient
from src.imagelab.services import CloudinaryValidationService
from tests.helpers.http import DummyHTTPResponse, configure_httpx

pytestmark = pytest.mark.unit

RESOURCE = {
    "public_id": "folder/shoe",
    "width": 1500,
    "height": 1500,
    "format": "jpg",
    "bytes": 250_000,
    "colors": [["#FFFFFF", 60.0], ["#000000", 40.0]],
    "quality_analysis": {"focus": 0.9},
    "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/folder/shoe.jpg",
}


def build_service(config) -> CloudinaryValidationService:
    return CloudinaryValidationService(cloudinary=CloudinaryClient(config=config))


@pytest.mark.asyncio
async def test_validate_cloudinary_url(monkeypatch, config):
    calls = configure_httpx(monkeypatch, get_responses=[DummyHTTPResponse(200, RESOURCE)])

    result = await build_service(config).validate(
        "https://res.cloudinary.com/demo/image/upload/v1712/folder/shoe.jpg",
        {"resize": {"width": 1000}, "crop": True, "background": "white"},
    )

    assert result.result_url == (
        "https://res.cloudinary.com/demo/image/upload/"
        "c_fill,w_1000,h_1200,q_auto:good,f_auto,b_white/folder/shoe"
    )
    assert result.validation.compliance.passed is True
    assert result.metadata.colors == RESOURCE["colors"]
    assert result.raw_data == RESOURCE
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_validate_external_url_uploads_first(monkeypatch, config):
    calls = configure_httpx(
        monkeypatch,
        post_responses=[DummyHTTPResponse(200, {"public_id": "uploaded123"})],
        get_responses=[DummyHTTPResponse(200, RESOURCE)],
    )

    result = await build_service(config).validate("https://example.com/shoe.jpg")

    assert [call[0] for call in calls] == ["POST", "GET"]
    assert calls[1][1].endswith("/resources/image/upload/uploaded123")
    assert result.result_url.endswith("/q_auto:good,f_auto/uploaded123")


@pytest.mark.asyncio
async def test_validate_missing_resource_is_not_found(monkeypatch, config):
    configure_httpx(monkeypatch, get_responses=[DummyHTTPResponse(404, text="")])

    with pytest.raises(NotFoundError) as exc_info:
        await build_service(config).validate(
            "https://res.cloudinary.com/demo/image/upload/v1/folder/shoe.jpg"
        )

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_validate_unparseable_cloudinary_url(config):
    with pytest.raises(InputError) as exc_info:
        await build_service(config).validate("https://res.cloudinary.com/demo/raw")

    assert exc_info.value.message == "Could not process image URL"


@pytest.mark.asyncio
async def test_validate_requires_admin_credentials(bare_config):
    with pytest.raises(ConfigurationError) as exc_info:
        await build_service(bare_config).validate("https://example.com/shoe.jpg")

    assert exc_info.value.message == "Cloudinary credentials not configured"
