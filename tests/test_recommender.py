"""Recommendation orchestration flows with scripted model replies."""

import base64
import json
from typing import List, Sequence

import pytest

from agents.recommender import RecommendationOrchestrator
from logic.errors import ParseError, UpstreamError, ValidationError
from models.clothing import ClothingAnalysis, ClothingItem
from models.occasion import OccasionContext
from models.recommendation import OutfitImage
from tools.image_search import ImageIllustrator, PlaceholderIllustrator
from tools.llm_client import MockLLMClient
from tools.weather_provider import MockWeatherProvider


def _image() -> str:
    return base64.b64encode(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16).decode("ascii")


def _combined_reply(**overrides) -> str:
    payload = {
        "clothingAnalysis": {
            "items": [
                {"type": "blazer", "color": "navy", "style": "formal", "material": "wool"},
                {"type": "trousers", "color": "grey", "style": "tailored"},
            ],
            "overallStyle": "business",
            "colorPalette": ["navy", "grey"],
            "summary": "A compact business wardrobe",
        },
        "occasionContext": {
            "occasion": "wedding",
            "location": "Japan",
            "formality": "formal",
            "tone": ["elegant"],
            "weatherConsideration": None,
            "culturalNotes": "Modest dress is appreciated",
        },
        "occasion": "wedding",
        "location": "Japan",
        "summary": "Build both looks around the navy blazer.",
        "recommendations": [
            "Navy blazer with grey trousers for a polished ceremony look",
            "Grey trousers with a crisp shirt for the reception",
        ],
        "culturalTips": ["Cover shoulders at the ceremony"],
        "dontWear": ["sneakers"],
        "shoppingTips": None,
    }
    payload.update(overrides)
    return "```json\n" + json.dumps(payload) + "\n```"


def _analysis() -> ClothingAnalysis:
    return ClothingAnalysis(
        items=(ClothingItem(type="dress", color="black", style="cocktail", material="silk"),),
        overall_style="evening",
        color_palette=("black",),
        summary="One cocktail dress",
    )


def _context(**overrides) -> OccasionContext:
    values = {"occasion": "gala", "raw_input": "charity gala in Paris", "formality": "formal", "location": "Paris"}
    values.update(overrides)
    return OccasionContext(**values)


class _BrokenIllustrator(ImageIllustrator):
    def search_outfit_images(self, description: str, count: int = 1) -> List[OutfitImage]:
        return []

    def get_images_for_descriptions(self, descriptions: Sequence[str]) -> List[OutfitImage]:
        raise RuntimeError("image service down")


def test_single_call_flow_builds_full_response() -> None:
    client = MockLLMClient([_combined_reply()])
    response = RecommendationOrchestrator(client).recommend(_image(), "wedding in Japan")

    assert [kind for kind, _ in client.calls] == ["vision"]
    assert "wedding in Japan" in client.calls[0][1]
    assert response.occasion == "wedding"
    assert len(response.recommendations) == 2
    assert response.cultural_tips == ("Cover shoulders at the ceremony",)
    assert response.shopping_tips is None
    assert response.clothing_analysis.items[0].material == "wool"
    assert response.occasion_context.raw_input == "wedding in Japan"
    assert response.occasion_context.formality == "formal"
    assert response.weather_considered is None
    assert response.outfit_images is None


def test_prompt_demands_json_and_wardrobe_only() -> None:
    client = MockLLMClient([_combined_reply()])
    RecommendationOrchestrator(client).recommend(_image(), "office party")
    prompt = client.calls[0][1]
    assert "Return ONLY valid JSON" in prompt
    assert "Use ONLY wardrobe items identified in the image" in prompt
    assert "MINIMIZE shopping suggestions" in prompt


@pytest.mark.parametrize("image, occasion", [("", "wedding"), ("   ", "wedding"), (_image(), ""), (_image(), "  \n")])
def test_blank_inputs_are_rejected_before_any_call(image: str, occasion: str) -> None:
    client = MockLLMClient([_combined_reply()])
    with pytest.raises(ValidationError):
        RecommendationOrchestrator(client).recommend(image, occasion)
    assert client.calls == []


def test_reply_without_summary_or_recommendations_fails_validation() -> None:
    client = MockLLMClient(['{"occasion":"business"}'])
    with pytest.raises(ValidationError, match="summary"):
        RecommendationOrchestrator(client).recommend(_image(), "board meeting")


def test_missing_recommendations_fail_validation() -> None:
    client = MockLLMClient(['{"occasion":"business","summary":"ok"}'])
    with pytest.raises(ValidationError, match="at least one outfit recommendation"):
        RecommendationOrchestrator(client).recommend(_image(), "board meeting")


def test_unparseable_reply_raises_parse_error() -> None:
    client = MockLLMClient(["Sorry, I can't see any clothes in this photo."])
    with pytest.raises(ParseError):
        RecommendationOrchestrator(client).recommend(_image(), "board meeting")


def test_primary_model_failure_propagates() -> None:
    client = MockLLMClient([UpstreamError("Gemini API server error. Please try again later.")])
    with pytest.raises(UpstreamError):
        RecommendationOrchestrator(client).recommend(_image(), "board meeting")


def test_malformed_embedded_analysis_is_dropped() -> None:
    reply = _combined_reply(clothingAnalysis={"items": [{"type": "shirt"}], "overallStyle": "x", "colorPalette": [], "summary": "y"})
    response = RecommendationOrchestrator(MockLLMClient([reply])).recommend(_image(), "wedding in Japan")
    assert response.clothing_analysis is None
    assert response.occasion_context is not None
    assert len(response.recommendations) == 2


def test_embedded_context_formality_is_coerced() -> None:
    reply = _combined_reply(occasionContext={"occasion": "party", "formality": "smart", "tone": "fun"})
    response = RecommendationOrchestrator(MockLLMClient([reply])).recommend(_image(), "birthday party")
    assert response.occasion_context.formality == "casual"
    assert response.occasion_context.tone == ()
    assert response.occasion_context.raw_input == "birthday party"


def test_weather_aware_flow_merges_weather() -> None:
    client = MockLLMClient(["Tokyo", _combined_reply()])
    weather = MockWeatherProvider()
    response = RecommendationOrchestrator(client, weather_provider=weather).recommend(
        _image(), "wedding in Tokyo", use_weather_aware=True
    )

    assert [kind for kind, _ in client.calls] == ["text", "vision"]
    assert client.options[0] == (50, 0.1)
    assert weather.requested == ["Tokyo"]
    assert "Tokyo, Japan" in client.calls[1][1]
    assert "28.0°C" in client.calls[1][1]
    assert response.weather_considered is True
    assert response.weather_data == weather.snapshot
    assert response.to_payload()["weatherData"]["location"] == "Tokyo, Japan"


def test_weather_failure_degrades_to_plain_prompt() -> None:
    client = MockLLMClient(["Atlantis", _combined_reply()])
    weather = MockWeatherProvider(error=UpstreamError("Location not found: Atlantis"))
    response = RecommendationOrchestrator(client, weather_provider=weather).recommend(
        _image(), "beach party in Atlantis", use_weather_aware=True
    )

    assert response.weather_considered is False
    assert response.weather_data is None
    assert len(response.recommendations) == 2
    assert "Humidity" not in client.calls[1][1]
    assert "weatherData" not in response.to_payload()


def test_no_location_skips_weather_lookup() -> None:
    client = MockLLMClient(["  NONE \n", _combined_reply()])
    weather = MockWeatherProvider()
    response = RecommendationOrchestrator(client, weather_provider=weather).recommend(
        _image(), "job interview", use_weather_aware=True
    )
    assert weather.requested == []
    assert response.weather_considered is False


def test_weather_flag_without_provider_uses_single_call() -> None:
    client = MockLLMClient([_combined_reply()])
    response = RecommendationOrchestrator(client).recommend(_image(), "wedding in Tokyo", use_weather_aware=True)
    assert [kind for kind, _ in client.calls] == ["vision"]
    assert response.weather_considered is None


def test_legacy_flow_falls_back_to_context_values() -> None:
    reply = json.dumps({"summary": "Let the dress lead.", "recommendations": ["Black silk dress with heels"]})
    client = MockLLMClient([reply])
    analysis, context = _analysis(), _context()
    response = RecommendationOrchestrator(client).recommend_from_analysis(analysis, context)

    assert [kind for kind, _ in client.calls] == ["text"]
    assert client.options == [(1024, 0.7)]
    assert "dress - black, cocktail, silk" in client.calls[0][1]
    assert "Formality Level: formal" in client.calls[0][1]
    assert response.occasion == "gala"
    assert response.location == "Paris"
    assert response.clothing_analysis is analysis
    assert response.occasion_context is context


def test_legacy_flow_requires_items_and_occasion() -> None:
    orchestrator = RecommendationOrchestrator(MockLLMClient())
    empty = ClothingAnalysis(items=(), overall_style="none", color_palette=(), summary="empty")
    with pytest.raises(ValidationError, match="at least one item"):
        orchestrator.recommend_from_analysis(empty, _context())
    with pytest.raises(ValidationError, match="specify an occasion"):
        orchestrator.recommend_from_analysis(_analysis(), _context(occasion=" "))
    with pytest.raises(ValidationError, match="required"):
        orchestrator.recommend_from_analysis(_analysis(), None)


def test_images_are_attached_in_recommendation_order() -> None:
    orchestrator = RecommendationOrchestrator(MockLLMClient([_combined_reply()]), illustrator=PlaceholderIllustrator())
    response = orchestrator.recommend(_image(), "wedding in Japan")
    assert [image.description for image in response.outfit_images] == list(response.recommendations)
    assert {image.source for image in response.outfit_images} == {"generated"}


def test_images_can_be_skipped() -> None:
    orchestrator = RecommendationOrchestrator(MockLLMClient([_combined_reply()]), illustrator=PlaceholderIllustrator())
    response = orchestrator.recommend(_image(), "wedding in Japan", include_images=False)
    assert response.outfit_images is None


def test_image_failure_never_fails_recommendation() -> None:
    orchestrator = RecommendationOrchestrator(MockLLMClient([_combined_reply()]), illustrator=_BrokenIllustrator())
    response = orchestrator.recommend(_image(), "wedding in Japan")
    assert response.outfit_images is None
    assert len(response.recommendations) == 2
