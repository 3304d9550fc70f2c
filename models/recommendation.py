"""Recommendation response and illustration value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from models.clothing import ClothingAnalysis
from models.occasion import OccasionContext
from models.weather import WeatherSnapshot


@dataclass(frozen=True)
class OutfitImage:
    """A representative photo attached to one outfit recommendation."""

    url: str
    thumbnail_url: str
    source: str
    description: Optional[str] = None
    photographer: Optional[str] = None
    photographer_url: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "url": self.url,
            "thumbnailUrl": self.thumbnail_url,
            "source": self.source,
        }
        if self.description is not None:
            payload["description"] = self.description
        if self.photographer is not None:
            payload["photographer"] = self.photographer
        if self.photographer_url is not None:
            payload["photographerUrl"] = self.photographer_url
        return payload


@dataclass(frozen=True)
class RecommendationResponse:
    """Outfit advice returned to the caller.

    Optional collections stay ``None`` when the model omitted them; an empty
    tuple means the model explicitly returned an empty list.
    """

    occasion: str
    summary: str
    recommendations: Tuple[Any, ...] = field(default_factory=tuple)
    location: Optional[str] = None
    cultural_tips: Optional[Tuple[Any, ...]] = None
    dont_wear: Optional[Tuple[Any, ...]] = None
    shopping_tips: Optional[Tuple[Any, ...]] = None
    clothing_analysis: Optional[ClothingAnalysis] = None
    occasion_context: Optional[OccasionContext] = None
    weather_data: Optional[WeatherSnapshot] = None
    weather_considered: Optional[bool] = None
    outfit_images: Optional[Tuple[OutfitImage, ...]] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "occasion": self.occasion,
            "summary": self.summary,
            "recommendations": list(self.recommendations),
        }
        optional = {
            "location": self.location,
            "culturalTips": list(self.cultural_tips) if self.cultural_tips is not None else None,
            "dontWear": list(self.dont_wear) if self.dont_wear is not None else None,
            "shoppingTips": list(self.shopping_tips) if self.shopping_tips is not None else None,
            "clothingAnalysis": self.clothing_analysis.to_payload() if self.clothing_analysis else None,
            "occasionContext": self.occasion_context.to_payload() if self.occasion_context else None,
            "weatherData": self.weather_data.to_payload() if self.weather_data else None,
            "weatherConsidered": self.weather_considered,
            "outfitImages": [image.to_payload() for image in self.outfit_images]
            if self.outfit_images is not None
            else None,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        return payload


__all__ = ["OutfitImage", "RecommendationResponse"]
