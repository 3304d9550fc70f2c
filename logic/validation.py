"""Pydantic schemas and helpers guarding orchestrator inputs and outputs."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as SchemaValidationError

from logic.errors import ValidationError
from models.recommendation import RecommendationResponse


class RecommendationEnvelope(BaseModel):
    """Minimal structure a recommendation must have to be worth returning."""

    occasion: str
    summary: str
    recommendations: List[Any] = Field(min_length=1)

    @field_validator("occasion")
    @classmethod
    def _occasion_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Recommendation response must include an occasion")
        return value

    @field_validator("summary")
    @classmethod
    def _summary_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Recommendation response must include a summary")
        return value

    @field_validator("recommendations")
    @classmethod
    def _entries_are_text(cls, value: List[Any]) -> List[Any]:
        for entry in value:
            if not isinstance(entry, str) or not entry.strip():
                raise ValueError("All recommendations must be non-empty strings")
        return value


def _first_message(exc: SchemaValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    if first.get("type") == "too_short" and field == "recommendations":
        return "Recommendation response must include at least one outfit recommendation"
    message = str(first.get("msg", "invalid value"))
    return message.removeprefix("Value error, ")


def validate_recommendation(response: RecommendationResponse) -> None:
    """Reject syntactically valid but unusable recommendations."""

    try:
        RecommendationEnvelope.model_validate(
            {
                "occasion": response.occasion,
                "summary": response.summary,
                "recommendations": list(response.recommendations),
            }
        )
    except SchemaValidationError as exc:
        raise ValidationError(_first_message(exc)) from exc


def require_text(value: Any, message: str) -> str:
    """Return ``value`` when it is a non-blank string, else raise."""

    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value


__all__ = ["RecommendationEnvelope", "validate_recommendation", "require_text"]
