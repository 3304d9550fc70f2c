"""Occasion context resolution: AI extraction first, keyword classification last."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence

from attire_app.logging_config import get_logger, log_event, operation_context
from logic.decoding import decode_occasion_context
from logic.prompts import build_context_prompt
from logic.response_extractor import extract_json
from models.occasion import DEFAULT_FORMALITY, OccasionContext
from models.occasion_taxonomy import (
    CULTURAL_NOTES,
    DEFAULT_OCCASION,
    DESIRE_VERBS,
    LOCATIONS,
    OCCASION_FORMALITY,
    OCCASION_KEYWORDS,
    OCCASION_WORD_PREFERENCES,
    PREFERENCES,
    RELIGIOUS_SITE_KEYWORDS,
    RELIGIOUS_SITE_NOTE,
    TONES,
    WEATHER_KEYWORDS,
    first_match,
    title_case,
)
from tools.llm_client import LLMClient


LOGGER = get_logger(__name__)

CONTEXT_MAX_TOKENS = 500
CONTEXT_TEMPERATURE = 0.3


class ContextStrategy(ABC):
    """One way of turning occasion text into an :class:`OccasionContext`."""

    name = "strategy"

    @abstractmethod
    def resolve(self, occasion_text: str) -> OccasionContext:
        """Return a context or raise to let the next strategy try."""


class AIContextStrategy(ContextStrategy):
    """Ask the model for a structured reading of the occasion."""

    name = "ai"

    def __init__(self, llm_client: LLMClient) -> None:
        self.llm_client = llm_client

    def resolve(self, occasion_text: str) -> OccasionContext:
        reply = self.llm_client.call(
            build_context_prompt(occasion_text),
            max_tokens=CONTEXT_MAX_TOKENS,
            temperature=CONTEXT_TEMPERATURE,
        )
        return decode_occasion_context(extract_json(reply), raw_input=occasion_text, default_occasion=DEFAULT_OCCASION)


class KeywordContextStrategy(ContextStrategy):
    """Deterministic offline classifier over fixed vocabularies.

    All matching is substring matching on the lower-cased text, so the same
    input always yields an identical context.
    """

    name = "keyword"

    def resolve(self, occasion_text: str) -> OccasionContext:
        text = occasion_text.lower()
        occasion = first_match(text, OCCASION_KEYWORDS) or DEFAULT_OCCASION
        location = self._location(text)
        return OccasionContext(
            occasion=occasion,
            raw_input=occasion_text,
            formality=OCCASION_FORMALITY.get(occasion, DEFAULT_FORMALITY),
            tone=tuple(tone for tone in TONES if tone in text),
            location=location,
            weather_consideration=first_match(text, WEATHER_KEYWORDS),
            cultural_notes=self._cultural_notes(text, location),
            preferences=self._preferences(text),
        )

    @staticmethod
    def _location(text: str) -> str | None:
        for place in LOCATIONS:
            if place in text:
                return title_case(place)
        return None

    @staticmethod
    def _cultural_notes(text: str, location: str | None) -> str | None:
        if any(keyword in text for keyword in RELIGIOUS_SITE_KEYWORDS):
            return RELIGIOUS_SITE_NOTE
        if location is None:
            return None
        return CULTURAL_NOTES.get(location)

    @staticmethod
    def _preferences(text: str) -> tuple:
        found: List[str] = []
        for preference in PREFERENCES:
            if preference not in text:
                continue
            # "casual"/"formal" usually describe the occasion itself
            if preference in OCCASION_WORD_PREFERENCES and not any(
                f"{verb} {preference}" in text for verb in DESIRE_VERBS
            ):
                continue
            found.append(preference)
        return tuple(found)


class ContextResolver:
    """Try each strategy in order; the keyword strategy always closes the chain."""

    def __init__(self, strategies: Sequence[ContextStrategy] = ()) -> None:
        ordered = [strategy for strategy in strategies if not isinstance(strategy, KeywordContextStrategy)]
        self.fallback = KeywordContextStrategy()
        self.strategies: List[ContextStrategy] = [*ordered, self.fallback]

    @classmethod
    def with_llm(cls, llm_client: LLMClient | None) -> "ContextResolver":
        """Build the usual AI-then-keyword chain, keyword only without a client."""

        return cls([AIContextStrategy(llm_client)] if llm_client else [])

    def resolve(self, occasion_text: str) -> OccasionContext:
        with operation_context("agent:context_resolver.resolve") as correlation_id:
            for strategy in self.strategies[:-1]:
                try:
                    context = strategy.resolve(occasion_text)
                except Exception as exc:  # noqa: BLE001
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "context_strategy_failed",
                        strategy=strategy.name,
                        error=type(exc).__name__,
                        detail=str(exc),
                        correlation_id=correlation_id,
                    )
                    continue
                self._log_resolved(strategy, context, correlation_id)
                return context

            context = self.fallback.resolve(occasion_text)
            self._log_resolved(self.fallback, context, correlation_id)
            return context

    @staticmethod
    def _log_resolved(strategy: ContextStrategy, context: OccasionContext, correlation_id: str) -> None:
        log_event(
            LOGGER,
            logging.INFO,
            "context_resolved",
            strategy=strategy.name,
            occasion=context.occasion,
            formality=context.formality,
            correlation_id=correlation_id,
        )


__all__ = ["ContextStrategy", "AIContextStrategy", "KeywordContextStrategy", "ContextResolver"]
