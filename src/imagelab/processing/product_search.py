"""Flatten Google Lens (SerpAPI) responses into product recognition results."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field

from ..schemas.base import ApiModel

RETAIL_SOURCE_MARKERS = ("amazon", "ebay", "walmart", "shop", "store")
COMMON_BRANDS = (
    "Apple",
    "Samsung",
    "Nike",
    "Adidas",
    "Sony",
    "Microsoft",
    "Google",
    "Amazon",
    "Dell",
    "HP",
    "Lenovo",
    "Asus",
    "LG",
    "Canon",
    "Nikon",
    "Gucci",
    "Louis Vuitton",
    "Chanel",
    "Prada",
    "Zara",
    "H&M",
)
RELATED_QUERY_SCORE = 0.7
PRIMARY_BRAND_SCORE = 0.9
MATCH_BRAND_SCORE = 0.8


class Label(ApiModel):
    description: str
    score: float
    source: str | None = None


class DetectedObject(ApiModel):
    name: str
    score: float


class Logo(ApiModel):
    description: str
    score: float


class StoreOffer(ApiModel):
    name: str
    price: str | None = None
    link: str | None = None
    currency: str | None = None


class SimilarProduct(ApiModel):
    title: str
    source: str | None = None
    price: str | None = None
    thumbnail: str | None = None
    link: str | None = None


class ProductDetails(ApiModel):
    title: str | None = None
    price: str | None = None
    currency: str | None = None
    stores: list[StoreOffer] = Field(default_factory=list)
    similar_products: list[SimilarProduct] = Field(default_factory=list)


class ProductRecognition(ApiModel):
    labels: list[Label] = Field(default_factory=list)
    objects: list[DetectedObject] = Field(default_factory=list)
    logos: list[Logo] = Field(default_factory=list)
    product_details: ProductDetails = Field(default_factory=ProductDetails)
    visual_matches: list[Any] = Field(default_factory=list)
    raw_data_available: bool = False


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _price(match: Mapping[str, Any]) -> Mapping[str, Any]:
    price = match.get("price")
    return price if isinstance(price, Mapping) else {}


def label_score(index: int) -> float:
    """Earlier visual matches are trusted more."""
    return max(0.9 - index * 0.05, 0.6)


def is_product_match(match: Mapping[str, Any]) -> bool:
    """A match qualifies when it carries a price or comes from a retail site."""
    if match.get("price"):
        return True
    source = match.get("source")
    if not isinstance(source, str):
        return False
    lowered = source.lower()
    return any(marker in lowered for marker in RETAIL_SOURCE_MARKERS)


def detect_brand(title: str) -> str | None:
    lowered = title.lower()
    for brand in COMMON_BRANDS:
        if brand.lower() in lowered:
            return brand
    return None


def process_product_info(serp_data: Any) -> ProductRecognition:
    """Build labels, logos and product offers from a Lens search; never raises."""

    result = ProductRecognition(raw_data_available=bool(serp_data))
    if not isinstance(serp_data, Mapping):
        return result

    matches: list[Mapping[str, Any]] = []
    raw_matches = serp_data.get("visual_matches")
    if isinstance(raw_matches, list):
        result.visual_matches = list(raw_matches)
        matches = [match for match in raw_matches if isinstance(match, Mapping)]

    details = result.product_details
    primary_index: int | None = None
    for index, match in enumerate(matches):
        title = _text(match.get("title"))
        if not title:
            continue
        source = _text(match.get("source"))
        result.labels.append(
            Label(description=title, score=label_score(index), source=source)
        )
        if not is_product_match(match):
            continue

        price = _price(match)
        price_value = _text(price.get("value"))
        currency = _text(price.get("currency"))
        link = _text(match.get("link"))

        if primary_index is None:
            primary_index = index
            details.title = title
            details.price = price_value
            details.currency = currency
        else:
            details.similar_products.append(
                SimilarProduct(
                    title=title,
                    source=source,
                    price=price_value,
                    thumbnail=_text(match.get("thumbnail")),
                    link=link,
                )
            )

        if source and price_value:
            details.stores.append(
                StoreOffer(name=source, price=price_value, link=link, currency=currency)
            )

    if details.title:
        brand = detect_brand(details.title)
        if brand:
            result.logos.append(Logo(description=brand, score=PRIMARY_BRAND_SCORE))

    seen = {logo.description for logo in result.logos}
    for match in matches:
        title = _text(match.get("title"))
        if not title:
            continue
        lowered = title.lower()
        for brand in COMMON_BRANDS:
            if brand.lower() in lowered and brand not in seen:
                seen.add(brand)
                result.logos.append(Logo(description=brand, score=MATCH_BRAND_SCORE))

    related = serp_data.get("related_content")
    if isinstance(related, list):
        for content in related:
            if not isinstance(content, Mapping):
                continue
            query = _text(content.get("query"))
            if query and len(query) > 3:
                result.labels.append(Label(description=query, score=RELATED_QUERY_SCORE))

    return result


__all__ = [
    "COMMON_BRANDS",
    "ProductDetails",
    "ProductRecognition",
    "detect_brand",
    "is_product_match",
    "label_score",
    "process_product_info",
]
