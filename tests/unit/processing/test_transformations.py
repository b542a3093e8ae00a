from __future__ import annotations

import pytest

from src.imagelab.processing.transformations import (
    build_transformation_url,
    build_transformations,
    extract_public_id,
    is_cloudinary_url,
)

pytestmark = pytest.mark.unit


def test_defaults_only_quality_and_format() -> None:
    assert build_transformations({}) == ["q_auto:good", "f_auto"]


def test_resize_with_crop_fills() -> None:
    codes = build_transformations(
        {"resize": {"width": 800}, "crop": True, "quality": 80, "format": "webp"}
    )

    assert codes == ["c_fill", "w_800", "h_1200", "q_80", "f_webp"]


def test_resize_without_crop_fits() -> None:
    codes = build_transformations({"resize": {"width": 500, "height": 400}})

    assert codes[:3] == ["c_fit", "w_500", "h_400"]


@pytest.mark.parametrize(
    ("background", "code"), [("remove", "e_background_removal"), ("white", "b_white")]
)
def test_background_codes(background, code) -> None:
    assert build_transformations({"background": background})[-1] == code


def test_transformation_url() -> None:
    url = build_transformation_url("demo", "folder/shoe", {"format": "png"})

    assert url == "https://res.cloudinary.com/demo/image/upload/q_auto:good,f_png/folder/shoe"


@pytest.mark.parametrize(
    ("url", "public_id"),
    [
        ("https://res.cloudinary.com/demo/image/upload/v1712/folder/shoe.jpg", "folder/shoe"),
        ("https://res.cloudinary.com/demo/image/upload/sample.png", "sample"),
        ("https://example.com/image.png", ""),
    ],
)
def test_extract_public_id(url, public_id) -> None:
    assert extract_public_id(url) == public_id


def test_is_cloudinary_url() -> None:
    assert is_cloudinary_url("https://res.cloudinary.com/demo/image/upload/a.jpg")
    assert not is_cloudinary_url("https://example.com/a.jpg")
