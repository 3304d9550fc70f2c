"""Canonical keyword vocabularies for offline occasion classification.

Every table here is ordered. Lookups walk the entries top to bottom and stop
at the first hit, so more specific phrases sit above the generic ones they
contain ("job interview" before "interview", "formal event" before "formal").
"""

from typing import Dict, List, Tuple

OCCASION_KEYWORDS: List[Tuple[Tuple[str, ...], str]] = [
    (("job interview", "interview"), "interview"),
    (("wedding", "marriage", "ceremony"), "wedding"),
    (("workout", "gym", "exercise", "running", "yoga", "fitness"), "workout"),
    (("funeral", "memorial"), "funeral"),
    (("gala", "ball"), "gala"),
    (("formal event", "formal"), "formal event"),
    (("business", "meeting", "conference", "office", "work"), "business"),
    (("party", "celebration", "birthday"), "party"),
    (("date", "dinner date", "romantic"), "date"),
    (("brunch", "lunch"), "casual dining"),
    (("beach", "pool"), "beach"),
    (("hiking", "outdoor"), "outdoor activity"),
    (("casual",), "casual"),
]
DEFAULT_OCCASION = "general"

OCCASION_FORMALITY: Dict[str, str] = {
    "wedding": "formal",
    "funeral": "formal",
    "gala": "formal",
    "formal event": "formal",
    "interview": "formal",
    "business": "business-casual",
    "casual dining": "business-casual",
    "date": "business-casual",
    "workout": "athletic",
    "beach": "casual",
    "party": "casual",
    "casual": "casual",
    "general": "casual",
}

LOCATIONS: List[str] = [
    # countries
    "japan", "thailand", "china", "korea", "singapore",
    "india", "vietnam", "malaysia", "indonesia", "philippines",
    "france", "germany", "italy", "spain", "uk", "england",
    "united states", "usa", "canada", "mexico", "brazil",
    "australia", "new zealand",
    "dubai", "egypt", "south africa",
    # cities
    "new york", "los angeles", "san francisco", "chicago", "boston",
    "london", "paris", "rome", "barcelona", "berlin",
    "tokyo", "kyoto", "osaka", "beijing", "shanghai",
    "bangkok", "hong kong", "seoul",
    "sydney", "melbourne",
]

CULTURAL_NOTES: Dict[str, str] = {
    "Japan": "Consider modest dress codes; remove shoes indoors",
    "Thailand": "Dress modestly, especially in temples; avoid pointing feet",
    "India": "Modest clothing recommended; consider cultural sensitivity",
    "Dubai": "Conservative dress expected; cover shoulders and knees",
    "Saudi Arabia": "Very conservative dress codes; women should cover",
    "Vatican": "Modest dress required; cover shoulders and knees",
    "Singapore": "Smart casual widely accepted; hot and humid climate",
}
RELIGIOUS_SITE_KEYWORDS: Tuple[str, ...] = ("temple", "mosque", "church")
RELIGIOUS_SITE_NOTE = "Religious site - modest, respectful attire required"

WEATHER_KEYWORDS: List[Tuple[Tuple[str, ...], str]] = [
    (("humid", "humidity"), "humid"),
    (("snowy", "snow"), "snowy"),
    (("rainy", "rain", "wet", "monsoon"), "rainy"),
    (("cold", "winter", "freezing", "chilly"), "cold"),
    (("hot", "warm", "summer", "heat", "tropical"), "hot"),
    (("dry", "arid"), "dry"),
    (("windy",), "windy"),
]

TONES: List[str] = [
    "elegant", "comfortable", "breathable", "professional",
    "casual", "sporty", "trendy", "conservative", "bold",
    "minimalist", "modern", "classic", "traditional",
    "sophisticated", "relaxed", "chic", "stylish",
    "edgy", "vintage", "bohemian", "preppy",
]

PREFERENCES: List[str] = [
    "breathable", "lightweight", "warm", "layered",
    "elegant", "comfortable", "professional",
    "minimalist", "bold", "colorful", "neutral",
    "fitted", "loose", "stretchy", "structured",
    "sustainable", "eco-friendly", "vintage",
    "luxury", "budget-friendly", "designer",
    "casual", "formal",
]
# Words that also name occasions; counted as preferences only after one of these verbs.
OCCASION_WORD_PREFERENCES: Tuple[str, ...] = ("casual", "formal")
DESIRE_VERBS: Tuple[str, ...] = ("prefer", "want", "need")


def first_match(text: str, groups: List[Tuple[Tuple[str, ...], str]]) -> str | None:
    """Return the value of the first group with a keyword contained in ``text``."""

    for keywords, value in groups:
        if any(keyword in text for keyword in keywords):
            return value
    return None


def title_case(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in value.split(" "))


__all__ = [
    "OCCASION_KEYWORDS",
    "DEFAULT_OCCASION",
    "OCCASION_FORMALITY",
    "LOCATIONS",
    "CULTURAL_NOTES",
    "RELIGIOUS_SITE_KEYWORDS",
    "RELIGIOUS_SITE_NOTE",
    "WEATHER_KEYWORDS",
    "TONES",
    "PREFERENCES",
    "OCCASION_WORD_PREFERENCES",
    "DESIRE_VERBS",
    "first_match",
    "title_case",
]
