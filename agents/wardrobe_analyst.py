"""Wardrobe analyst turning a clothing photo into a structured inventory."""

from __future__ import annotations

import logging

from attire_app.logging_config import get_logger, log_event, operation_context
from logic.decoding import decode_clothing_analysis
from logic.prompts import build_wardrobe_analysis_prompt
from logic.response_extractor import extract_json
from logic.validation import require_text
from models.clothing import ClothingAnalysis
from tools.llm_client import LLMClient


LOGGER = get_logger(__name__)


class WardrobeAnalyst:
    """Runs a vision extraction over the wardrobe image."""

    def __init__(self, llm_client: LLMClient) -> None:
        self.llm_client = llm_client

    def analyze_clothing(self, image_data: str) -> ClothingAnalysis:
        require_text(image_data, "Image data (base64) is required")

        with operation_context("agent:wardrobe_analyst.analyze_clothing") as correlation_id:
            reply = self.llm_client.call_vision(image_data, build_wardrobe_analysis_prompt())
            analysis = decode_clothing_analysis(extract_json(reply))
            log_event(
                LOGGER,
                logging.INFO,
                "wardrobe_analyzed",
                items=len(analysis.items),
                overall_style=analysis.overall_style,
                correlation_id=correlation_id,
            )
            return analysis


__all__ = ["WardrobeAnalyst"]
