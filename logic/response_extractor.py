"""Locate and parse the JSON object embedded in raw model output."""

from __future__ import annotations

import json
from typing import Any

from logic.errors import ParseError


def extract_json(raw_text: str) -> Any:
    """Parse the span between the first ``{`` and the last ``}``.

    The span is greedy rather than brace-balanced, so prose or markdown fences
    around the payload are tolerated. Several independent objects in one reply
    are not: the span then covers all of them and fails to parse. Callers
    validate the shape of the returned value themselves.
    """

    if not isinstance(raw_text, str):
        raise ParseError("Model response is not text")

    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise ParseError("No JSON object found in model response")

    try:
        return json.loads(raw_text[start : end + 1])
    except json.JSONDecodeError as exc:
        raise ParseError(f"Model response is not valid JSON: {exc.msg}") from exc


__all__ = ["extract_json"]
