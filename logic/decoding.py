"""Decode untyped model JSON into typed, immutable values.

Two registers live here. Strict decoders (:func:`decode_clothing_item`,
:func:`decode_clothing_analysis`) reject malformed payloads with
:class:`ParseError`. Lenient decoders (:func:`decode_occasion_context`,
:func:`decode_recommendation`) fill documented defaults so a partially
conforming reply still yields a well-typed value, leaving usefulness checks to
:mod:`logic.validation`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from logic.errors import ParseError
from models.clothing import ClothingAnalysis, ClothingItem
from models.occasion import OccasionContext, coerce_formality
from models.recommendation import RecommendationResponse


def _require_object(value: Any, label: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ParseError(f"Invalid response structure: '{label}' must be an object")
    return value


def _optional_text(value: Any) -> Optional[str]:
    """Treat ``None``, missing and blank values as absent."""

    if value is None or value is False:
        return None
    text = str(value).strip()
    return text or None


def _optional_list(value: Any) -> Optional[Tuple[Any, ...]]:
    return tuple(value) if isinstance(value, list) else None


def _string_list(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(entry.strip() for entry in value if isinstance(entry, str) and entry.strip())


def _trimmed_entries(value: Any) -> Tuple[Any, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(entry.strip() if isinstance(entry, str) else entry for entry in value)


def decode_clothing_item(value: Any) -> ClothingItem:
    raw = _require_object(value, "items[]")
    required = {key: _optional_text(raw.get(key)) for key in ("type", "color", "style")}
    missing = sorted(key for key, text in required.items() if text is None)
    if missing:
        raise ParseError(f"Each clothing item must have type, color, and style (missing {', '.join(missing)})")
    return ClothingItem(
        type=required["type"],
        color=required["color"],
        style=required["style"],
        material=_optional_text(raw.get("material")),
        condition=_optional_text(raw.get("condition")),
    )


def decode_clothing_analysis(value: Any) -> ClothingAnalysis:
    raw = _require_object(value, "clothingAnalysis")
    if not isinstance(raw.get("items"), list):
        raise ParseError("Invalid response structure: 'items' must be an array")
    if not isinstance(raw.get("overallStyle"), str):
        raise ParseError("Invalid response structure: 'overallStyle' must be a string")
    if not isinstance(raw.get("colorPalette"), list):
        raise ParseError("Invalid response structure: 'colorPalette' must be an array")
    if not isinstance(raw.get("summary"), str):
        raise ParseError("Invalid response structure: 'summary' must be a string")

    return ClothingAnalysis(
        items=tuple(decode_clothing_item(item) for item in raw["items"]),
        overall_style=raw["overallStyle"].strip(),
        color_palette=tuple(str(color).strip() for color in raw["colorPalette"]),
        summary=raw["summary"].strip(),
    )


def decode_occasion_context(value: Any, raw_input: str, default_occasion: str = "general") -> OccasionContext:
    """Build an :class:`OccasionContext` from model JSON.

    ``raw_input`` is the caller's text and is never taken from the payload.
    """

    raw = _require_object(value, "occasionContext")
    return OccasionContext(
        occasion=_optional_text(raw.get("occasion")) or default_occasion,
        raw_input=raw_input,
        formality=coerce_formality(raw.get("formality")),
        tone=_string_list(raw.get("tone")),
        location=_optional_text(raw.get("location")),
        weather_consideration=_optional_text(raw.get("weatherConsideration")),
        cultural_notes=_optional_text(raw.get("culturalNotes")),
        preferences=_string_list(raw.get("preferences")),
    )


def decode_recommendation(
    value: Any,
    *,
    default_occasion: str = "Unknown",
    default_location: Optional[str] = None,
) -> RecommendationResponse:
    """Map a recommendation payload field by field with explicit defaults.

    String recommendation entries are trimmed. Non-string and blank entries are
    kept so validation can reject them.
    """

    raw = _require_object(value, "recommendation")
    recommendations = raw.get("recommendations")
    return RecommendationResponse(
        occasion=_optional_text(raw.get("occasion")) or default_occasion,
        location=_optional_text(raw.get("location")) or default_location,
        summary=raw["summary"] if isinstance(raw.get("summary"), str) else "",
        recommendations=_trimmed_entries(recommendations),
        cultural_tips=_optional_list(raw.get("culturalTips")),
        dont_wear=_optional_list(raw.get("dontWear")),
        shopping_tips=_optional_list(raw.get("shoppingTips")),
    )


__all__ = [
    "decode_clothing_item",
    "decode_clothing_analysis",
    "decode_occasion_context",
    "decode_recommendation",
]
