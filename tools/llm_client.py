"""LLM client abstractions and the Gemini implementation."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from attire_app.config import DEFAULT_GEMINI_MODEL
from logic.errors import UpstreamError, ValidationError
from tools.observability import instrument_call


LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 1024
DEFAULT_TEMPERATURE = 0.7
VISION_MAX_TOKENS = 2048

_BASE64_PATTERN = re.compile(r"^[A-Za-z0-9+/=\s]+$")
_DATA_URI_TYPES = ("image/png", "image/gif", "image/webp")


@dataclass(frozen=True)
class ImagePayload:
    """Decoded image bytes plus the media type sent to the model."""

    mime_type: str
    data: bytes


def _sniff_mime_type(data: bytes) -> str:
    if data[:4] == b"\x89PNG":
        return "image/png"
    if data[:3] == b"\xff\xd8\xff":
        return "image/jpeg"
    if data[:3] == b"GIF":
        return "image/gif"
    if data[:4] == b"RIFF":
        return "image/webp"
    return "image/jpeg"


def decode_image(image_base64: str) -> ImagePayload:
    """Strip an optional data URI prefix, validate and decode base64 image data.

    The media type comes from the data URI prefix when present and from the
    magic bytes otherwise, defaulting to JPEG.
    """

    if not isinstance(image_base64, str) or not image_base64.strip():
        raise ValidationError("Image data (base64) cannot be empty")

    prefix = ""
    body = image_base64.strip()
    if "," in body:
        prefix, body = body.split(",", 1)

    if not body or not _BASE64_PATTERN.match(body):
        raise ValidationError("Invalid base64 image data")
    try:
        data = base64.b64decode("".join(body.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Invalid base64 image data") from exc

    mime_type = next((candidate for candidate in _DATA_URI_TYPES if candidate in prefix), None)
    if mime_type is None:
        mime_type = "image/jpeg" if prefix else _sniff_mime_type(data)
    return ImagePayload(mime_type=mime_type, data=data)


class LLMClient(ABC):
    """Text and vision completion interface consumed by the agents.

    Input checks live here so every implementation rejects empty prompts and
    malformed images the same way before any transport work happens.
    """

    def call(
        self,
        prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> str:
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValidationError("Prompt cannot be empty")
        return self._complete(prompt, max_tokens=max_tokens, temperature=temperature)

    def call_vision(self, image_base64: str, prompt: str) -> str:
        image = decode_image(image_base64)
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValidationError("Prompt cannot be empty")
        return self._complete_vision(image, prompt)

    @abstractmethod
    def _complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """Return the model's text reply to a text-only prompt."""

    @abstractmethod
    def _complete_vision(self, image: ImagePayload, prompt: str) -> str:
        """Return the model's text reply to an image plus prompt."""


class GeminiClient(LLMClient):
    """Gemini-backed client with upstream errors mapped to :class:`UpstreamError`."""

    def __init__(self, api_key: str | None = None, model: str = DEFAULT_GEMINI_MODEL) -> None:
        if api_key:
            genai.configure(api_key=api_key)
        self.model_name = model
        self._model = genai.GenerativeModel(model)

    @instrument_call("gemini.generate_text")
    def _complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        LOGGER.debug("Calling Gemini with text prompt", extra={"prompt_chars": len(prompt)})
        config = genai.GenerationConfig(max_output_tokens=max_tokens, temperature=temperature)
        return self._generate(prompt, config, "generate_text")

    @instrument_call("gemini.generate_vision")
    def _complete_vision(self, image: ImagePayload, prompt: str) -> str:
        LOGGER.debug(
            "Calling Gemini with image prompt",
            extra={"mime_type": image.mime_type, "image_bytes": len(image.data)},
        )
        config = genai.GenerationConfig(max_output_tokens=VISION_MAX_TOKENS)
        contents = [{"mime_type": image.mime_type, "data": image.data}, prompt]
        return self._generate(contents, config, "generate_vision")

    def _generate(self, contents: object, config: genai.GenerationConfig, method: str) -> str:
        try:
            response = self._model.generate_content(contents, generation_config=config)
        except google_exceptions.GoogleAPICallError as exc:
            raise self._translate_error(exc, method) from exc

        try:
            text = response.text
        except ValueError as exc:
            raise UpstreamError(f"No text content in Gemini response ({method})") from exc
        if not text:
            raise UpstreamError(f"No text content in Gemini response ({method})")
        return text

    @staticmethod
    def _translate_error(exc: google_exceptions.GoogleAPICallError, method: str) -> UpstreamError:
        LOGGER.error("Gemini API error", extra={"method": method, "status": exc.code})
        if isinstance(exc, (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied)):
            return UpstreamError("Invalid Gemini API key. Check your GOOGLE_API_KEY environment variable.")
        if isinstance(exc, google_exceptions.ResourceExhausted):
            return UpstreamError("Gemini API rate limit exceeded. Please try again in a moment.")
        if isinstance(exc, google_exceptions.ServerError):
            return UpstreamError("Gemini API server error. Please try again later.")
        return UpstreamError(f"Gemini API error: {exc.message or 'Unknown error'}")


Reply = str | Callable[[str], str]


class MockLLMClient(LLMClient):
    """Offline client replaying scripted replies for tests.

    Each reply is a string, a callable receiving the prompt, or an exception
    instance to raise. Calls are recorded as ``(kind, prompt)`` tuples.
    """

    def __init__(self, replies: Sequence[Reply | BaseException] = ()) -> None:
        self._replies: List[Reply | BaseException] = list(replies)
        self.calls: List[Tuple[str, str]] = []
        self.options: List[Tuple[int, float]] = []

    def _next_reply(self, prompt: str) -> str:
        if not self._replies:
            raise UpstreamError("MockLLMClient has no scripted reply left")
        reply = self._replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply

    def _complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        self.calls.append(("text", prompt))
        self.options.append((max_tokens, temperature))
        return self._next_reply(prompt)

    def _complete_vision(self, image: ImagePayload, prompt: str) -> str:
        self.calls.append(("vision", prompt))
        return self._next_reply(prompt)


__all__ = ["ImagePayload", "LLMClient", "GeminiClient", "MockLLMClient", "decode_image"]
