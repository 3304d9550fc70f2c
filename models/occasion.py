"""Occasion context value type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

FORMALITY_LEVELS: Tuple[str, ...] = ("casual", "business-casual", "formal", "athletic")
DEFAULT_FORMALITY = "casual"


def coerce_formality(value: Any) -> str:
    """Return ``value`` when it is a known formality level, else ``casual``."""

    if isinstance(value, str) and value in FORMALITY_LEVELS:
        return value
    return DEFAULT_FORMALITY


@dataclass(frozen=True)
class OccasionContext:
    """Structured reading of the user's free-text occasion description.

    ``raw_input`` always holds the text exactly as the caller supplied it, no
    matter which strategy filled in the remaining fields.
    """

    occasion: str
    raw_input: str
    formality: str = DEFAULT_FORMALITY
    tone: Tuple[str, ...] = field(default_factory=tuple)
    location: Optional[str] = None
    weather_consideration: Optional[str] = None
    cultural_notes: Optional[str] = None
    preferences: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "formality", coerce_formality(self.formality))

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "occasion": self.occasion,
            "formality": self.formality,
            "tone": list(self.tone),
            "rawInput": self.raw_input,
        }
        if self.location is not None:
            payload["location"] = self.location
        if self.weather_consideration is not None:
            payload["weatherConsideration"] = self.weather_consideration
        if self.cultural_notes is not None:
            payload["culturalNotes"] = self.cultural_notes
        if self.preferences is not None:
            payload["preferences"] = list(self.preferences)
        return payload


__all__ = ["FORMALITY_LEVELS", "DEFAULT_FORMALITY", "OccasionContext", "coerce_formality"]
