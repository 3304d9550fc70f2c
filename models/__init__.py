"""Model package exports."""

from models.clothing import ClothingAnalysis, ClothingItem
from models.occasion import FORMALITY_LEVELS, OccasionContext, coerce_formality
from models.recommendation import OutfitImage, RecommendationResponse
from models.weather import WeatherSnapshot

__all__ = [
    "ClothingAnalysis",
    "ClothingItem",
    "FORMALITY_LEVELS",
    "OccasionContext",
    "coerce_formality",
    "OutfitImage",
    "RecommendationResponse",
    "WeatherSnapshot",
]
