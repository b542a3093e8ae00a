from __future__ import annotations

import httpx
import pytest

from src.imagelab.exceptions import UpstreamError, VendorTimeoutError
from src.imagelab.providers.providers_base import (
    extract_vendor_error,
    raise_for_vendor_status,
    translate_http_errors,
)
from tests.helpers.http import DummyHTTPResponse

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ({"error_message": "Bad input"}, "Bad input"),
        ({"detail": "Not allowed"}, "Not allowed"),
        ({"error": {"message": "Nested"}}, "Nested"),
        (
            {"error_message": "Invalid", "error_details": {"operations": ["unknown key"]}},
            "Invalid - operations: unknown key",
        ),
    ],
)
def test_extract_vendor_error_from_json(body, expected) -> None:
    assert extract_vendor_error(DummyHTTPResponse(400, body)) == expected


def test_extract_vendor_error_truncates_raw_text() -> None:
    response = DummyHTTPResponse(502, text="x" * 500)

    assert extract_vendor_error(response) == "x" * 200


@pytest.mark.parametrize(("vendor_status", "expected"), [(401, 401), (404, 404), (429, 429), (400, 500), (503, 500)])
def test_status_mapping(vendor_status, expected) -> None:
    with pytest.raises(UpstreamError) as exc_info:
        raise_for_vendor_status(DummyHTTPResponse(vendor_status, {"message": "nope"}), "Claid")

    assert exc_info.value.status_code == expected
    assert exc_info.value.message == "Claid API error: nope"


def test_success_does_not_raise() -> None:
    raise_for_vendor_status(DummyHTTPResponse(201, {}), "Claid")


def test_transport_errors_are_translated() -> None:
    with pytest.raises(VendorTimeoutError) as timeout_info:
        with translate_http_errors("Meshy", timeout=30):
            raise httpx.ReadTimeout("slow")
    with pytest.raises(UpstreamError):
        with translate_http_errors("Meshy"):
            raise httpx.ConnectError("refused")

    assert timeout_info.value.message == "Request timeout"
    assert timeout_info.value.status_code == 500
    assert "30s" in timeout_info.value.details
