"""Occasion context resolution across the AI and keyword strategies."""

import json
import logging

import pytest

from agents.context_resolver import AIContextStrategy, ContextResolver, KeywordContextStrategy
from logic.errors import UpstreamError
from models.occasion import FORMALITY_LEVELS
from tools.llm_client import MockLLMClient


def _keyword(text: str):
    return KeywordContextStrategy().resolve(text)


def test_wedding_in_japan_scenario() -> None:
    context = _keyword("wedding in Japan")
    assert context.occasion == "wedding"
    assert context.location == "Japan"
    assert context.formality == "formal"
    assert "modest" in context.cultural_notes


def test_specific_occasion_keywords_win() -> None:
    assert _keyword("job interview tomorrow").occasion == "interview"
    assert _keyword("black tie gala, formal dress").occasion == "gala"
    assert _keyword("casual brunch with friends").occasion == "casual dining"


def test_unmatched_text_resolves_to_general() -> None:
    context = _keyword("something nice for saturday")
    assert context.occasion == "general"
    assert context.formality == "casual"
    assert context.location is None
    assert context.cultural_notes is None


def test_multi_word_locations_are_title_cased() -> None:
    assert _keyword("business trip to new york").location == "New York"


def test_religious_site_note_takes_priority() -> None:
    context = _keyword("visiting a temple in Thailand")
    assert context.location == "Thailand"
    assert context.cultural_notes == "Religious site - modest, respectful attire required"


def test_weather_keywords_follow_priority_order() -> None:
    assert _keyword("hot and humid beach day").weather_consideration == "humid"
    assert _keyword("rainy office day").weather_consideration == "rainy"
    assert _keyword("office day").weather_consideration is None


def test_casual_only_counts_as_preference_after_desire_verb() -> None:
    assert _keyword("casual brunch").preferences == ()
    context = _keyword("dinner out, I prefer casual and breathable fabrics")
    assert context.preferences == ("breathable", "casual")


def test_tone_vocabulary_matches() -> None:
    context = _keyword("an elegant and modern party")
    assert context.tone == ("elegant", "modern")


def test_keyword_strategy_is_idempotent() -> None:
    text = "Beach wedding in Bali, want breathable and elegant looks"
    assert _keyword(text) == _keyword(text)
    assert _keyword(text).to_payload() == _keyword(text).to_payload()


def test_ai_strategy_decodes_model_reply() -> None:
    reply = "Here is the context: " + json.dumps(
        {
            "occasion": "wedding",
            "location": "Kyoto",
            "formality": "black tie",
            "tone": "elegant",
            "weatherConsideration": None,
            "culturalNotes": "",
            "preferences": ["breathable"],
        }
    )
    client = MockLLMClient([reply])
    context = AIContextStrategy(client).resolve("Wedding in Kyoto next week")

    assert context.occasion == "wedding"
    assert context.location == "Kyoto"
    assert context.formality == "casual"
    assert context.tone == ()
    assert context.weather_consideration is None
    assert context.cultural_notes is None
    assert context.preferences == ("breathable",)
    assert context.raw_input == "Wedding in Kyoto next week"
    assert client.options == [(500, 0.3)]
    assert client.calls[0][0] == "text"


def test_resolver_prefers_ai_strategy() -> None:
    client = MockLLMClient(['{"occasion": "gala", "formality": "formal", "location": "Paris"}'])
    context = ContextResolver.with_llm(client).resolve("fancy night out in paris")
    assert context.occasion == "gala"
    assert context.formality == "formal"


@pytest.mark.parametrize(
    "reply",
    [UpstreamError("Gemini API rate limit exceeded"), "I cannot help with that", '["not", "an", "object"]'],
)
def test_resolver_falls_back_to_keywords(reply, caplog: pytest.LogCaptureFixture) -> None:
    resolver = ContextResolver.with_llm(MockLLMClient([reply]))
    with caplog.at_level(logging.WARNING):
        context = resolver.resolve("job interview in London")

    assert context == _keyword("job interview in London")
    assert any(getattr(record, "event", None) == "context_strategy_failed" for record in caplog.records)


def test_resolver_without_client_uses_keywords_only() -> None:
    resolver = ContextResolver.with_llm(None)
    assert [strategy.name for strategy in resolver.strategies] == ["keyword"]
    assert resolver.resolve("gym session").formality == "athletic"


def test_keyword_strategy_always_closes_the_chain() -> None:
    resolver = ContextResolver([KeywordContextStrategy(), AIContextStrategy(MockLLMClient())])
    assert [strategy.name for strategy in resolver.strategies] == ["ai", "keyword"]


@pytest.mark.parametrize(
    "text",
    ["", "   ", "WEDDING!!!", "  Beach Party in Bali  ", "prefer formal, need warm layers in winter", "🙂 date night"],
)
def test_resolver_never_raises_and_keeps_raw_input(text: str) -> None:
    context = ContextResolver.with_llm(MockLLMClient([UpstreamError("offline")])).resolve(text)
    assert context.formality in FORMALITY_LEVELS
    assert context.raw_input == text
