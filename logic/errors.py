"""Error taxonomy shared by the resolver, orchestrator and adapters."""

from __future__ import annotations


class AttireError(Exception):
    """Base class for every error raised by the advisor pipeline."""

    code = "INTERNAL_ERROR"


class ValidationError(AttireError):
    """Caller input or a model response failed a required check."""

    code = "VALIDATION_ERROR"


class ParseError(AttireError):
    """Model output could not be decoded into the expected structure."""

    code = "PARSE_ERROR"


class UpstreamError(AttireError):
    """A consumed service (LLM, weather, image search) failed."""

    code = "UPSTREAM_ERROR"


__all__ = ["AttireError", "ValidationError", "ParseError", "UpstreamError"]
