"""Recommendation orchestrator: flow selection, model calls and response merging."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from attire_app.logging_config import get_logger, log_event, operation_context
from logic.decoding import decode_clothing_analysis, decode_occasion_context, decode_recommendation
from logic.errors import ParseError, ValidationError
from logic.prompts import (
    NO_LOCATION_SENTINEL,
    build_legacy_prompt,
    build_location_prompt,
    build_single_call_prompt,
    build_weather_aware_prompt,
)
from logic.response_extractor import extract_json
from logic.validation import require_text, validate_recommendation
from models.clothing import ClothingAnalysis
from models.occasion import OccasionContext
from models.recommendation import RecommendationResponse
from models.weather import WeatherSnapshot
from tools.image_search import ImageIllustrator
from tools.llm_client import LLMClient
from tools.weather_provider import WeatherProvider


LOGGER = get_logger(__name__)

LOCATION_MAX_TOKENS = 50
LOCATION_TEMPERATURE = 0.1
LEGACY_MAX_TOKENS = 1024
LEGACY_TEMPERATURE = 0.7


class RecommendationOrchestrator:
    """Turns a wardrobe photo and occasion text into validated outfit advice.

    Three flows are supported:

    * single-call: one vision prompt analyses the image, reads the occasion and
      recommends outfits in a single JSON payload;
    * weather-aware: a cheap text call extracts a location, current weather is
      looked up, then a weather-augmented vision prompt produces the advice;
    * legacy: a pre-built :class:`ClothingAnalysis` and :class:`OccasionContext`
      are embedded in a text-only prompt.

    Weather and image lookups only enrich the response. Failures of the primary
    model call, JSON extraction and validation propagate to the caller.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        weather_provider: WeatherProvider | None = None,
        illustrator: ImageIllustrator | None = None,
    ) -> None:
        self.llm_client = llm_client
        self.weather_provider = weather_provider
        self.illustrator = illustrator

    def recommend(
        self,
        image_data: str,
        occasion_text: str,
        use_weather_aware: bool = False,
        include_images: bool = True,
    ) -> RecommendationResponse:
        """Run the single-call or weather-aware flow for one request."""

        require_text(image_data, "Image data (base64) is required")
        require_text(occasion_text, "Occasion description is required")

        weather_aware = use_weather_aware and self.weather_provider is not None
        flow = "weather_aware" if weather_aware else "single_call"
        with operation_context(f"agent:recommender.{flow}") as correlation_id:
            log_event(
                LOGGER,
                logging.INFO,
                "agent_call_started",
                agent="recommender",
                method="recommend",
                flow=flow,
                correlation_id=correlation_id,
            )
            if weather_aware:
                response = self._recommend_with_weather(image_data, occasion_text)
            else:
                reply = self.llm_client.call_vision(image_data, build_single_call_prompt(occasion_text))
                response = self._assemble_combined(reply, occasion_text)

            response = self._attach_images(response, include_images)
            log_event(
                LOGGER,
                logging.INFO,
                "agent_call_completed",
                agent="recommender",
                method="recommend",
                flow=flow,
                recommendations=len(response.recommendations),
                weather_considered=response.weather_considered,
                images=len(response.outfit_images or ()),
                correlation_id=correlation_id,
            )
            return response

    def recommend_from_analysis(
        self,
        analysis: ClothingAnalysis | None,
        context: OccasionContext | None,
        include_images: bool = True,
    ) -> RecommendationResponse:
        """Legacy flow over a pre-built wardrobe analysis and occasion context."""

        if analysis is None or context is None:
            raise ValidationError("Both clothing analysis and occasion context are required for recommendations")
        if not analysis.items:
            raise ValidationError("Clothing analysis must contain at least one item")
        if not context.occasion or not context.occasion.strip():
            raise ValidationError("Occasion context must specify an occasion")

        with operation_context("agent:recommender.legacy") as correlation_id:
            reply = self.llm_client.call(
                build_legacy_prompt(analysis, context),
                max_tokens=LEGACY_MAX_TOKENS,
                temperature=LEGACY_TEMPERATURE,
            )
            response = decode_recommendation(
                extract_json(reply),
                default_occasion=context.occasion,
                default_location=context.location,
            )
            validate_recommendation(response)
            response = replace(response, clothing_analysis=analysis, occasion_context=context)
            response = self._attach_images(response, include_images)
            log_event(
                LOGGER,
                logging.INFO,
                "agent_call_completed",
                agent="recommender",
                method="recommend_from_analysis",
                flow="legacy",
                recommendations=len(response.recommendations),
                correlation_id=correlation_id,
            )
            return response

    def _recommend_with_weather(self, image_data: str, occasion_text: str) -> RecommendationResponse:
        location = self._extract_location(occasion_text)
        weather = self._lookup_weather(location) if location else None

        if weather is not None:
            prompt = build_weather_aware_prompt(occasion_text, weather)
        else:
            prompt = build_single_call_prompt(occasion_text)
        reply = self.llm_client.call_vision(image_data, prompt)
        response = self._assemble_combined(reply, occasion_text)
        return replace(response, weather_data=weather, weather_considered=weather is not None)

    def _extract_location(self, occasion_text: str) -> Optional[str]:
        reply = self.llm_client.call(
            build_location_prompt(occasion_text),
            max_tokens=LOCATION_MAX_TOKENS,
            temperature=LOCATION_TEMPERATURE,
        )
        location = reply.strip()
        if not location or location == NO_LOCATION_SENTINEL:
            log_event(LOGGER, logging.INFO, "location_not_found")
            return None
        return location

    def _lookup_weather(self, location: str) -> Optional[WeatherSnapshot]:
        try:
            weather = self.weather_provider.get_current_weather(location)
        except Exception as exc:  # noqa: BLE001
            log_event(
                LOGGER,
                logging.WARNING,
                "weather_lookup_failed",
                error=type(exc).__name__,
                detail=str(exc),
            )
            return None
        log_event(LOGGER, logging.INFO, "weather_fetched", weather_summary=weather.summary)
        return weather

    def _assemble_combined(self, reply: str, occasion_text: str) -> RecommendationResponse:
        payload = extract_json(reply)
        response = decode_recommendation(payload)
        validate_recommendation(response)
        return replace(
            response,
            clothing_analysis=self._embedded_analysis(payload),
            occasion_context=self._embedded_context(payload, occasion_text),
        )

    @staticmethod
    def _embedded_analysis(payload: Dict[str, Any]) -> Optional[ClothingAnalysis]:
        value = payload.get("clothingAnalysis")
        if value is None:
            return None
        try:
            return decode_clothing_analysis(value)
        except ParseError as exc:
            log_event(LOGGER, logging.WARNING, "clothing_analysis_dropped", detail=str(exc))
            return None

    @staticmethod
    def _embedded_context(payload: Dict[str, Any], occasion_text: str) -> Optional[OccasionContext]:
        value = payload.get("occasionContext")
        if not isinstance(value, dict):
            return None
        return decode_occasion_context(value, raw_input=occasion_text)

    def _attach_images(self, response: RecommendationResponse, include_images: bool) -> RecommendationResponse:
        if not include_images or self.illustrator is None:
            return response
        try:
            images = self.illustrator.get_images_for_descriptions(list(response.recommendations))
        except Exception as exc:  # noqa: BLE001
            log_event(LOGGER, logging.WARNING, "image_lookup_failed", error=type(exc).__name__, detail=str(exc))
            return response
        return replace(response, outfit_images=tuple(images))


__all__ = ["RecommendationOrchestrator"]
