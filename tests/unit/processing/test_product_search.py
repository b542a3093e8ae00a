from __future__ import annotations

import pytest

from src.imagelab.processing.product_search import (
    detect_brand,
    is_product_match,
    label_score,
    process_product_info,
)

pytestmark = pytest.mark.unit

SERP_RESPONSE = {
    "visual_matches": [
        {"title": "Vintage poster", "source": "Pinterest"},
        {
            "title": "Nike Air Max 90",
            "source": "Amazon.com",
            "link": "https://amazon.example/nike",
            "price": {"value": "$129.99", "currency": "$"},
            "thumbnail": "https://img.example/nike.jpg",
        },
        {"title": "Adidas Ultraboost", "source": "Foot Locker Store"},
        {
            "title": "Nike running shoe",
            "source": "eBay",
            "price": {"value": "$80", "currency": "$"},
        },
    ],
    "related_content": [{"query": "air max"}, {"query": "aj1"}],
}


def test_label_score_decays_to_floor() -> None:
    assert label_score(0) == pytest.approx(0.9)
    assert label_score(2) == pytest.approx(0.8)
    assert label_score(10) == pytest.approx(0.6)


def test_product_match_rules() -> None:
    assert is_product_match({"price": {"value": "$1"}})
    assert is_product_match({"source": "Walmart"})
    assert not is_product_match({"source": "Pinterest"})


def test_detect_brand() -> None:
    assert detect_brand("new nike shoe") == "Nike"
    assert detect_brand("unbranded mug") is None


def test_primary_product_is_first_qualifying_match() -> None:
    result = process_product_info(SERP_RESPONSE)
    details = result.product_details

    assert details.title == "Nike Air Max 90"
    assert details.price == "$129.99"
    assert details.currency == "$"
    assert [item.title for item in details.similar_products] == [
        "Adidas Ultraboost",
        "Nike running shoe",
    ]
    assert [(store.name, store.price) for store in details.stores] == [
        ("Amazon.com", "$129.99"),
        ("eBay", "$80"),
    ]


def test_labels_and_logos() -> None:
    result = process_product_info(SERP_RESPONSE)

    descriptions = [label.description for label in result.labels]
    assert descriptions == [
        "Vintage poster",
        "Nike Air Max 90",
        "Adidas Ultraboost",
        "Nike running shoe",
        "air max",
    ]
    assert result.labels[-1].score == pytest.approx(0.7)
    assert [(logo.description, logo.score) for logo in result.logos] == [
        ("Nike", 0.9),
        ("Adidas", 0.8),
    ]
    assert result.raw_data_available is True
    assert len(result.visual_matches) == 4
    assert result.objects == []


@pytest.mark.parametrize("payload", [None, {}, {"visual_matches": "oops"}, []])
def test_empty_or_malformed_search_never_raises(payload) -> None:
    result = process_product_info(payload)

    assert result.labels == []
    assert result.product_details.title is None
