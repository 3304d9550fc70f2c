"""FastAPI server exposing the advisor for deployment."""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from attire_app.app import AttireAdvisorApp
from attire_app.logging_config import configure_logging, get_logger, log_event
from logic.errors import AttireError, ParseError, UpstreamError, ValidationError
from models.occasion import DEFAULT_FORMALITY


LOGGER = get_logger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (ParseError, 502),
    (UpstreamError, 502),
)


class AnalyzeRequest(BaseModel):
    """Request payload for one recommendation."""

    image: str = Field(..., description="Base64 wardrobe photo, optionally as a data URI")
    occasion: str = Field(..., description="Free-text occasion description")
    use_weather: bool = Field(False, description="Fetch current weather for the mentioned location")
    include_images: bool = Field(True, description="Attach example outfit photos")
    legacy: bool = Field(False, description="Use the analysis-then-recommend pipeline")


def status_for(exc: AttireError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500


def create_app(advisor: AttireAdvisorApp | None = None) -> FastAPI:
    """Build the FastAPI instance around an advisor, creating one from env when omitted."""

    advisor = advisor or AttireAdvisorApp()
    api = FastAPI(title="Attire Advisor", version="0.1.0")

    @api.exception_handler(AttireError)
    async def handle_attire_error(request: Request, exc: AttireError) -> JSONResponse:
        status = status_for(exc)
        log_event(
            LOGGER,
            logging.WARNING if status < 500 else logging.ERROR,
            "request_failed",
            path=request.url.path,
            code=exc.code,
            status=status,
        )
        return JSONResponse(status_code=status, content={"error": str(exc), "code": exc.code})

    @api.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        log_event(
            LOGGER,
            logging.ERROR,
            "request_crashed",
            path=request.url.path,
            error=type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error", "code": "INTERNAL_ERROR"})

    @api.get("/healthz")
    def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "attire-advisor",
            "environment": advisor.config.environment or "local",
            "model": advisor.config.model,
            "weather": advisor.weather_provider is not None,
        }

    @api.post("/analyze")
    def analyze(request: AnalyzeRequest) -> dict:
        """Return outfit recommendations for one wardrobe photo and occasion."""

        if request.legacy:
            response = advisor.recommend_from_parts(
                request.image, request.occasion, include_images=request.include_images
            )
        else:
            response = advisor.recommend(
                request.image,
                request.occasion,
                use_weather_aware=request.use_weather,
                include_images=request.include_images,
            )
        payload = response.to_payload()
        context = response.occasion_context
        payload["formality"] = context.formality if context else DEFAULT_FORMALITY
        return payload

    return api


def get_app() -> FastAPI:
    """Expose a configured FastAPI instance for ASGI servers."""

    configure_logging()
    return create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=int(os.getenv("PORT", "8080")), reload=False)
