"""Coerce client supplied edit operations into the enhancement vendor schema.

The input is whatever JSON the browser sent, so nothing about its shape is
trusted. The functions here never raise: malformed values degrade to the
defaults the vendor accepts.
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Mapping
from typing import Any

from .models import ClaidOperations, ClaidPayload

logger = logging.getLogger(__name__)

ADJUSTMENT_KEYS = ("hdr", "exposure", "saturation", "contrast", "sharpness")
# Blocks the vendor only accepts as objects.
OBJECT_BLOCKS = ("restorations", "background", "resizing")

DEFAULT_OPERATIONS: dict[str, Any] = {
    "resizing": {"width": 1200, "height": 1200, "fit": "bounds"},
}
DEFAULT_OUTPUT: dict[str, Any] = {"format": "jpeg"}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    if isinstance(value, int):
        return value
    return math.floor(value + 0.5)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    # JSON integers may exceed the float range; they are still exact numbers.
    return isinstance(value, int) or (isinstance(value, float) and math.isfinite(value))


def _is_set(value: Any) -> bool:
    # Empty objects still count as "provided".
    if isinstance(value, (Mapping, list)):
        return True
    return bool(value)


def sanitize_adjustments(adjustments: Any) -> dict[str, int]:
    source = adjustments if isinstance(adjustments, Mapping) else {}
    return {
        key: round_half_up(source[key]) if _is_number(source.get(key)) else 0
        for key in ADJUSTMENT_KEYS
    }


def sanitize_remove(value: Any) -> bool | dict[str, Any]:
    """Normalise ``background.remove`` to ``bool`` or a single-selector object."""

    if value is False:
        return False
    if not _is_set(value):
        return False
    if not isinstance(value, Mapping):
        return True

    selection = dict(value)
    if selection.get("category"):
        selection.pop("selective", None)
        return selection
    if selection.get("selective"):
        selection.pop("category", None)
        return selection
    return True


def sanitize_operations(operations: Any) -> dict[str, Any]:
    """Return a vendor-valid copy of ``operations``.

    Missing or non-object input yields the default resize operation.
    Sanitizing an already sanitized mapping returns an equal mapping.
    """

    cleaned: dict[str, Any] = (
        copy.deepcopy(dict(operations)) if isinstance(operations, Mapping) else {}
    )

    for block in OBJECT_BLOCKS:
        if block in cleaned and not isinstance(cleaned[block], Mapping):
            logger.debug("claid.operations.dropped_block", extra={"block": block})
            cleaned.pop(block)

    if _is_set(cleaned.get("adjustments")):
        cleaned["adjustments"] = sanitize_adjustments(cleaned["adjustments"])
    elif "adjustments" in cleaned:
        cleaned.pop("adjustments")

    restorations = cleaned.get("restorations")
    if restorations is not None:
        if "decompress" in restorations and restorations["decompress"] is None:
            restorations.pop("decompress")
        if restorations.get("polish") is False:
            restorations.pop("polish")

    background = cleaned.get("background")
    if background is not None:
        if "color" in background and background["color"] is None:
            background.pop("color")
        if "remove" in background:
            if background["remove"] is None:
                background.pop("remove")
            else:
                background["remove"] = sanitize_remove(background["remove"])

    if not cleaned:
        cleaned = copy.deepcopy(DEFAULT_OPERATIONS)
    return cleaned


def build_claid_payload(
    image_url: str,
    operations: Any = None,
    output: Mapping[str, Any] | None = None,
) -> ClaidPayload:
    """Combine the sanitized operations, image and output block."""

    sanitized = sanitize_operations(operations)
    return ClaidPayload(
        input=image_url,
        operations=ClaidOperations.model_validate(sanitized),
        output=dict(output) if output else copy.deepcopy(DEFAULT_OUTPUT),
    )


__all__ = [
    "ADJUSTMENT_KEYS",
    "DEFAULT_OPERATIONS",
    "DEFAULT_OUTPUT",
    "build_claid_payload",
    "round_half_up",
    "sanitize_adjustments",
    "sanitize_operations",
    "sanitize_remove",
]
