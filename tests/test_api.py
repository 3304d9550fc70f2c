"""HTTP surface exercised through FastAPI's TestClient."""

import base64
import json

from fastapi.testclient import TestClient

from attire_app.app import AttireAdvisorApp
from attire_app.config import AttireConfig
from logic.errors import UpstreamError
from server.api import create_app
from tools.image_search import PlaceholderIllustrator
from tools.llm_client import MockLLMClient
from tools.weather_provider import MockWeatherProvider


IMAGE = base64.b64encode(b"\xff\xd8\xff\xe0" + b"\x00" * 16).decode("ascii")
REPLY = json.dumps(
    {
        "occasionContext": {"occasion": "interview", "formality": "formal", "tone": []},
        "occasion": "interview",
        "summary": "Keep it sharp and simple.",
        "recommendations": ["Charcoal suit with a white shirt"],
    }
)


def _client(replies, weather_provider=None, **client_kwargs) -> TestClient:
    advisor = AttireAdvisorApp(
        config=AttireConfig(api_key="test-key", weather_enabled=False),
        llm_client=MockLLMClient(replies),
        weather_provider=weather_provider,
        illustrator=PlaceholderIllustrator(),
    )
    return TestClient(create_app(advisor), **client_kwargs)


def test_healthz_reports_configuration() -> None:
    response = _client([]).get("/healthz")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["model"] == "gemini-1.5-flash"
    assert body["weather"] is False


def test_analyze_returns_recommendations_with_formality() -> None:
    response = _client([REPLY]).post("/analyze", json={"image": IMAGE, "occasion": "job interview"})
    assert response.status_code == 200
    body = response.json()
    assert body["formality"] == "formal"
    assert body["recommendations"] == ["Charcoal suit with a white shirt"]
    assert body["occasionContext"]["rawInput"] == "job interview"
    assert body["outfitImages"][0]["source"] == "generated"
    assert "weatherConsidered" not in body


def test_analyze_weather_flow() -> None:
    client = _client(["Tokyo", REPLY], weather_provider=MockWeatherProvider())
    response = client.post(
        "/analyze", json={"image": IMAGE, "occasion": "interview in Tokyo", "use_weather": True, "include_images": False}
    )
    body = response.json()
    assert body["weatherConsidered"] is True
    assert body["weatherData"]["location"] == "Tokyo, Japan"
    assert "outfitImages" not in body


def test_formality_defaults_to_casual_without_context() -> None:
    reply = json.dumps({"occasion": "brunch", "summary": "Easy", "recommendations": ["Linen shirt"]})
    body = _client([reply]).post("/analyze", json={"image": IMAGE, "occasion": "brunch"}).json()
    assert body["formality"] == "casual"


def test_blank_occasion_is_a_validation_error() -> None:
    response = _client([REPLY]).post("/analyze", json={"image": IMAGE, "occasion": "   "})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_unusable_model_output_maps_to_bad_gateway() -> None:
    response = _client(["no json here"]).post("/analyze", json={"image": IMAGE, "occasion": "party"})
    assert response.status_code == 502
    assert response.json()["code"] == "PARSE_ERROR"

    response = _client([UpstreamError("Gemini API rate limit exceeded.")]).post(
        "/analyze", json={"image": IMAGE, "occasion": "party"}
    )
    assert response.status_code == 502
    assert response.json() == {"error": "Gemini API rate limit exceeded.", "code": "UPSTREAM_ERROR"}


def test_unexpected_errors_are_internal() -> None:
    client = _client([RuntimeError("kaboom")], raise_server_exceptions=False)
    response = client.post("/analyze", json={"image": IMAGE, "occasion": "party"})
    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_ERROR"


def test_legacy_pipeline_over_http() -> None:
    analysis = json.dumps(
        {
            "items": [{"type": "suit", "color": "charcoal", "style": "tailored"}],
            "overallStyle": "business",
            "colorPalette": ["charcoal"],
            "summary": "One suit",
        }
    )
    context = json.dumps({"occasion": "interview", "formality": "formal"})
    client = _client([analysis, context, REPLY])
    body = client.post("/analyze", json={"image": IMAGE, "occasion": "job interview", "legacy": True}).json()
    assert body["clothingAnalysis"]["items"][0]["type"] == "suit"
    assert body["occasionContext"]["occasion"] == "interview"
    assert body["formality"] == "formal"
