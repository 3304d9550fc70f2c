"""Attire Advisor app bootstrap."""

from __future__ import annotations

import logging

from attire_app.config import AttireConfig
from attire_app.logging_config import configure_logging, get_logger, log_event, operation_context
from agents.context_resolver import ContextResolver
from agents.recommender import RecommendationOrchestrator
from agents.wardrobe_analyst import WardrobeAnalyst
from logic.validation import require_text
from models.occasion import OccasionContext
from models.recommendation import RecommendationResponse
from tools.image_search import ImageIllustrator, UnsplashImageSearch
from tools.llm_client import GeminiClient, LLMClient
from tools.weather_provider import OpenMeteoProvider, WeatherProvider


LOGGER = get_logger(__name__)


class AttireAdvisorApp:
    """Wires together config, model client, providers and agents.

    Every collaborator can be injected; anything left out is built from
    ``config``. Pass ``weather_provider=None`` with ``weather_enabled`` off to
    run without weather lookups.
    """

    def __init__(
        self,
        config: AttireConfig | None = None,
        llm_client: LLMClient | None = None,
        weather_provider: WeatherProvider | None = None,
        illustrator: ImageIllustrator | None = None,
    ) -> None:
        self.config = config or AttireConfig.from_env()
        configure_logging(self.config.log_level)

        self.llm_client = llm_client or GeminiClient(api_key=self.config.api_key, model=self.config.model)
        if weather_provider is None and self.config.weather_enabled:
            weather_provider = OpenMeteoProvider(timeout_seconds=self.config.request_timeout_seconds)
        self.weather_provider = weather_provider
        self.illustrator = illustrator or UnsplashImageSearch(
            access_key=self.config.unsplash_access_key,
            timeout_seconds=self.config.request_timeout_seconds,
        )

        self.context_resolver = ContextResolver.with_llm(self.llm_client)
        self.wardrobe_analyst = WardrobeAnalyst(self.llm_client)
        self.recommender = RecommendationOrchestrator(
            llm_client=self.llm_client,
            weather_provider=self.weather_provider,
            illustrator=self.illustrator,
        )

    def recommend(
        self,
        image_data: str,
        occasion_text: str,
        use_weather_aware: bool = False,
        include_images: bool = True,
    ) -> RecommendationResponse:
        """Single-call or weather-aware recommendation for one wardrobe photo."""

        with operation_context("app:recommend") as correlation_id:
            log_event(
                LOGGER,
                logging.INFO,
                "app_call_started",
                agent="app",
                method="recommend",
                use_weather_aware=use_weather_aware,
                include_images=include_images,
                correlation_id=correlation_id,
            )
            response = self.recommender.recommend(
                image_data,
                occasion_text,
                use_weather_aware=use_weather_aware,
                include_images=include_images,
            )
            log_event(
                LOGGER,
                logging.INFO,
                "app_call_completed",
                agent="app",
                method="recommend",
                recommendations=len(response.recommendations),
                correlation_id=correlation_id,
            )
            return response

    def recommend_from_parts(
        self,
        image_data: str,
        occasion_text: str,
        include_images: bool = True,
    ) -> RecommendationResponse:
        """Legacy pipeline: analyse the wardrobe, resolve the occasion, then recommend."""

        require_text(image_data, "Image data (base64) is required")
        require_text(occasion_text, "Occasion description is required")

        with operation_context("app:recommend_from_parts") as correlation_id:
            analysis = self.wardrobe_analyst.analyze_clothing(image_data)
            context = self.context_resolver.resolve(occasion_text)
            response = self.recommender.recommend_from_analysis(analysis, context, include_images=include_images)
            log_event(
                LOGGER,
                logging.INFO,
                "app_call_completed",
                agent="app",
                method="recommend_from_parts",
                occasion=context.occasion,
                items=len(analysis.items),
                correlation_id=correlation_id,
            )
            return response

    def resolve_context(self, occasion_text: str) -> OccasionContext:
        require_text(occasion_text, "Occasion description is required")
        return self.context_resolver.resolve(occasion_text)


__all__ = ["AttireAdvisorApp"]
