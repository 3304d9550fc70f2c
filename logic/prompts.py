"""Prompt builders shared by the context resolver and the recommender."""

from __future__ import annotations

from typing import List

from models.clothing import ClothingAnalysis
from models.occasion import OccasionContext
from models.weather import WeatherSnapshot

NO_LOCATION_SENTINEL = "NONE"

ADVISOR_ROLE = (
    "You are a professional fashion advisor with expertise in wardrobe analysis, "
    "cultural awareness, and occasion-appropriate styling."
)

WARDROBE_RULES: List[str] = [
    "PRIMARY GOAL: Create great outfits from what they already own",
    "Use ONLY wardrobe items identified in the image; never invent pieces they do not have",
    "Be SPECIFIC about which wardrobe items to combine (use exact colors/styles from the image)",
    "Keep recommendations BRIEF and actionable",
    "Consider cultural appropriateness for the location and occasion",
    "MINIMIZE shopping suggestions - assume their wardrobe is adequate",
    "Provide practical advice they can use immediately",
]

_CLOTHING_ANALYSIS_SCHEMA = """  "clothingAnalysis": {
    "items": [
      {
        "type": "clothing item type",
        "color": "color description",
        "style": "style classification",
        "material": "material if visible (optional)",
        "condition": "condition if notable (optional)"
      }
    ],
    "overallStyle": "overall style assessment",
    "colorPalette": ["color1", "color2", "color3"],
    "summary": "brief summary of the wardrobe"
  },"""


def _bullets(lines: List[str]) -> str:
    return "\n".join(f"- {line}" for line in lines)


def json_only(schema: str) -> str:
    """Standard closing block demanding a bare JSON object."""

    return f"Return ONLY valid JSON with this exact structure (no markdown, no extra text):\n{schema}"


def _quoted(text: str) -> str:
    return '"' + text.replace('"', '\\"') + '"'


def build_context_prompt(occasion_text: str) -> str:
    """Structured-extraction prompt used by the AI context strategy."""

    schema = """{
  "occasion": "string - the event type (wedding, business, workout, party, interview, casual, date, formal event, funeral, gala, beach, outdoor activity, general, etc.)",
  "location": "string or null - city/country name if mentioned (e.g., 'Japan', 'New York', 'Paris')",
  "formality": "string - one of: casual, business-casual, formal, athletic",
  "tone": ["array of style descriptors mentioned: elegant, comfortable, professional, minimalist, modern, classic, sophisticated, etc."],
  "weatherConsideration": "string or null - one of: hot, cold, rainy, humid, snowy, dry, windy, or null if not mentioned",
  "culturalNotes": "string or null - cultural or religious considerations based on location or event type",
  "preferences": ["array of user preferences: breathable, lightweight, warm, fitted, loose, sustainable, luxury, etc."]
}"""
    rules = [
        "Be precise with occasion types (use common categories)",
        "For formality: weddings/funerals/galas/interviews = formal, business/dates = business-casual, "
        "workouts = athletic, parties/casual = casual",
        "Only include tone/preferences explicitly mentioned",
        "Extract weather only if explicitly mentioned (hot, cold, humid, rainy, etc.)",
        "For cultural notes, consider location-specific dress codes "
        "(Japan = modest, Dubai = conservative, temples = respectful, etc.)",
        "Handle negations: if user says \"NOT formal\" or \"don't want business\", adjust accordingly",
        "Return null for location/weatherConsideration/culturalNotes if not applicable",
        "Return empty arrays for tone/preferences if none mentioned",
    ]
    return (
        "You are a fashion context analyzer. Parse the user's input about an occasion and extract "
        "structured information.\n\n"
        f"User input: {_quoted(occasion_text)}\n\n"
        "Extract the following information and return exactly one JSON object.\n"
        f"{json_only(schema)}\n\n"
        f"Rules:\n{_bullets(rules)}\n\n"
        "Return only the JSON object, nothing else."
    )


def build_location_prompt(occasion_text: str) -> str:
    """Cheap text-only prompt that pulls one location string out of the occasion."""

    return (
        "Extract the location (city and/or country) from this text. If there is a location mentioned, "
        'return ONLY the location name in the format "City" or "City, Country". '
        f'If no location is mentioned, return "{NO_LOCATION_SENTINEL}".\n\n'
        f"Text: {_quoted(occasion_text)}\n\n"
        f'Return only the location or "{NO_LOCATION_SENTINEL}", nothing else.'
    )


def build_wardrobe_analysis_prompt() -> str:
    schema = """{
  "items": [
    {
      "type": "clothing item type",
      "color": "color description",
      "style": "style classification",
      "material": "material if visible (optional)",
      "condition": "condition if notable (optional)"
    }
  ],
  "overallStyle": "overall style assessment",
  "colorPalette": ["color1", "color2", "color3"],
  "summary": "brief human-readable summary of the wardrobe"
}"""
    return (
        "Analyze this clothing image and provide structured information in JSON format.\n\n"
        "Extract the following:\n"
        "1. Each visible clothing item (type, color, style, material if visible, condition if notable)\n"
        "2. Overall style assessment (formal, casual, sporty, vintage, bohemian, athletic, business-casual, etc.)\n"
        "3. Dominant color palette used in the wardrobe\n"
        "4. Human-readable summary of what's visible\n\n"
        "Only list items actually visible in the image.\n\n"
        f"{json_only(schema)}\n\n"
        "Be specific and accurate. If uncertain about details, provide your best assessment."
    )


def _combined_schema(location: str, weather_consideration: str, outfit_hint: str, summary_hint: str) -> str:
    return (
        "{\n"
        f"{_CLOTHING_ANALYSIS_SCHEMA}\n"
        '  "occasionContext": {\n'
        '    "occasion": "event type extracted",\n'
        f'    "location": {location},\n'
        '    "formality": "casual | business-casual | formal | athletic",\n'
        f'    "weatherConsideration": {weather_consideration},\n'
        '    "culturalNotes": "cultural considerations based on location, or null"\n'
        "  },\n"
        '  "occasion": "event type",\n'
        f'  "location": {location},\n'
        f'  "summary": "{summary_hint}",\n'
        '  "recommendations": [\n'
        f'    "outfit combo 1: {outfit_hint}",\n'
        f'    "outfit combo 2: {outfit_hint}",\n'
        f'    "outfit combo 3: {outfit_hint}"\n'
        "  ],\n"
        '  "culturalTips": ["essential dress code requirement"] or null,\n'
        '  "dontWear": ["item/style to avoid"],\n'
        '  "shoppingTips": null or ["only critical gaps"]\n'
        "}"
    )


def build_single_call_prompt(occasion_text: str) -> str:
    """One vision prompt covering wardrobe analysis, occasion reading and advice."""

    schema = _combined_schema(
        location='"location if mentioned, otherwise null"',
        weather_consideration='"hot | cold | humid | rainy | etc, or null"',
        outfit_hint="specific pieces to wear together and why",
        summary_hint="how to style their wardrobe for this occasion",
    )
    return f"""{ADVISOR_ROLE}

TASK: Analyze the clothing image and provide complete fashion recommendations for the user's occasion.

USER'S OCCASION:
{_quoted(occasion_text)}

YOUR COMPREHENSIVE ANALYSIS SHOULD:

1. ANALYZE THE CLOTHING IMAGE:
   - Identify all visible clothing items (type, color, style, material if visible)
   - Assess overall wardrobe style (formal, casual, sporty, business, etc.)
   - Note the dominant color palette
   - Provide a brief summary of what's in their wardrobe

2. UNDERSTAND THE OCCASION:
   - Extract the event type (wedding, business, workout, party, interview, date, etc.)
   - Identify location if mentioned (city/country)
   - Determine formality level (casual, business-casual, formal, athletic)
   - Note any weather considerations (hot, cold, humid, etc.)
   - Consider cultural context based on location
   - Extract style preferences mentioned

3. CREATE OUTFIT RECOMMENDATIONS:
   - Suggest 3-5 creative outfit combinations using ONLY items from their wardrobe
   - Each outfit should be 1-2 sentences describing which pieces to wear together and WHY
   - Consider the occasion, formality, weather, and cultural appropriateness
   - Suggest 1-2 items to AVOID wearing
   - Optional: Only suggest shopping for items if there's a critical gap

IMPORTANT GUIDELINES:
{_bullets(WARDROBE_RULES)}

{json_only(schema)}"""


def build_weather_aware_prompt(occasion_text: str, weather: WeatherSnapshot) -> str:
    """Single-call prompt extended with current conditions in instructions and schema."""

    conditions = f"{weather.temperature}°C and {weather.weather_description}"
    schema = _combined_schema(
        location=_quoted(weather.location),
        weather_consideration=_quoted(weather.weather_description),
        outfit_hint="specific pieces to wear together and why it works for the weather and occasion",
        summary_hint="how to style their wardrobe for this occasion IN THESE WEATHER CONDITIONS",
    )
    return f"""{ADVISOR_ROLE}

TASK: Analyze the clothing image and provide complete fashion recommendations for the user's occasion, taking into account the CURRENT WEATHER CONDITIONS.

USER'S OCCASION:
{_quoted(occasion_text)}

CURRENT WEATHER CONDITIONS:
Location: {weather.location}
Temperature: {weather.temperature}°C ({weather.temperature_fahrenheit}°F)
Weather: {weather.weather_description}
Humidity: {weather.humidity}%
Wind Speed: {weather.wind_speed} km/h
Precipitation: {weather.precipitation}mm
Summary: {weather.summary}

YOUR COMPREHENSIVE ANALYSIS SHOULD:

1. ANALYZE THE CLOTHING IMAGE:
   - Identify all visible clothing items (type, color, style, material if visible)
   - Assess overall wardrobe style (formal, casual, sporty, business, etc.)
   - Note the dominant color palette
   - Provide a brief summary of what's in their wardrobe

2. UNDERSTAND THE OCCASION:
   - Extract the event type (wedding, business, workout, party, interview, date, etc.)
   - Determine formality level (casual, business-casual, formal, athletic)
   - Consider cultural context based on location
   - Extract style preferences mentioned

3. CREATE WEATHER-APPROPRIATE OUTFIT RECOMMENDATIONS:
   - CRITICAL: Factor in the current temperature, precipitation, wind, and humidity
   - Suggest 3-5 creative outfit combinations using ONLY items from their wardrobe
   - Each outfit should be WEATHER-APPROPRIATE and explain why it works for these conditions
   - Consider layering for temperature fluctuations
   - Recommend breathable fabrics for heat, warm layers for cold
   - Suggest rain-appropriate items if precipitation is expected
   - Suggest 1-2 items to AVOID wearing (weather-inappropriate or occasion-inappropriate)
   - Optional: Only suggest shopping for critical weather-related gaps (e.g., umbrella, rain jacket)

IMPORTANT GUIDELINES:
- WEATHER IS A PRIMARY FACTOR: All recommendations must be appropriate for {conditions}
- Explain WHY each outfit works for BOTH the occasion AND the weather
{_bullets(WARDROBE_RULES)}

{json_only(schema)}"""


def build_legacy_prompt(analysis: ClothingAnalysis, context: OccasionContext) -> str:
    """Text-only prompt embedding a pre-built wardrobe analysis and occasion context."""

    items_list = "\n".join(f"{index}. {item.describe()}" for index, item in enumerate(analysis.items, start=1))
    location_value = _quoted(context.location) if context.location else "null"
    palette = ", ".join(analysis.color_palette)
    tone = ", ".join(context.tone) or "Not specified"
    preferences = ", ".join(context.preferences or ()) or "None"
    location_text = context.location or "Not specified"
    weather_text = context.weather_consideration or "Not specified"
    cultural_text = context.cultural_notes or "None"
    schema = (
        "{\n"
        f'  "occasion": {_quoted(context.occasion)},\n'
        f'  "location": {location_value},\n'
        '  "summary": "how to style their wardrobe for this occasion - focus on creative combinations",\n'
        '  "recommendations": [\n'
        '    "outfit combo 1: specific pieces to wear together and why it works",\n'
        '    "outfit combo 2: specific pieces to wear together and why it works",\n'
        '    "outfit combo 3: specific pieces to wear together and why it works"\n'
        "  ],\n"
        '  "culturalTips": ["essential dress code requirement"] or null if no critical tips,\n'
        '  "dontWear": ["item/style to avoid 1"],\n'
        '  "shoppingTips": null (or only include if there\'s a critical gap like "missing formal shoes")\n'
        "}"
    )
    return f"""You are a professional fashion advisor with expertise in cultural awareness, style matching, and occasion-appropriate attire.

TASK: Provide personalized outfit recommendations based on the user's wardrobe and their upcoming occasion.

USER'S WARDROBE:
Overall Style: {analysis.overall_style}
Color Palette: {palette}
Available Items:
{items_list}

Summary: {analysis.summary}

OCCASION DETAILS:
- Event Type: {context.occasion}
- Location: {location_text}
- Formality Level: {context.formality}
- Desired Tone/Style: {tone}
- Weather Considerations: {weather_text}
- Cultural Notes: {cultural_text}
- User Preferences: {preferences}

INSTRUCTIONS:
1. FOCUS: Create 3-5 creative outfit combinations using ONLY the available items listed above
   - Each outfit should be 1-2 sentences describing which pieces to wear together
   - Explain WHY each combination works for this occasion
2. Provide brief styling advice explaining how to maximize their current wardrobe (1-2 sentences)
3. Include cultural/location-specific dress tips only if critically important
4. Suggest 1-2 items to AVOID wearing (style mismatch or cultural inappropriateness)
5. OPTIONAL: Only suggest shopping for items if there's a critical gap in their wardrobe

IMPORTANT:
{_bullets(WARDROBE_RULES)}

{json_only(schema)}"""


__all__ = [
    "NO_LOCATION_SENTINEL",
    "WARDROBE_RULES",
    "json_only",
    "build_context_prompt",
    "build_location_prompt",
    "build_wardrobe_analysis_prompt",
    "build_single_call_prompt",
    "build_weather_aware_prompt",
    "build_legacy_prompt",
]
