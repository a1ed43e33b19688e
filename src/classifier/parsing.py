"""
Classification response parsing.

Turns the model's raw reply into a `RawClassification`. Model output is
untrusted: a stray markdown fence is tolerated, missing or mistyped fields
are rejected, and an out-of-range confidence is clamped rather than rejected.
"""

from __future__ import annotations

import json
import math
import re

from .errors import MalformedResponse
from .models import RawClassification

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")


def strip_code_fence(text: str) -> str:
    """Remove a single surrounding ``` / ```json fence, if present."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _require_text(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise MalformedResponse(f"Field '{key}' must be a non-empty string.")
    return value.strip()


def _require_confidence(data: dict) -> float:
    value = data.get("confidence")
    # bool is an int subclass but never a meaningful confidence
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponse("Field 'confidence' must be a number.")
    if isinstance(value, float) and math.isnan(value):
        raise MalformedResponse("Field 'confidence' must be a number.")
    # ints compare exactly against the float bounds, however many digits they have
    return float(max(0.0, min(1.0, value)))


def parse_classification_response(text: str) -> RawClassification:
    """
    Parse and validate a classification reply.

    Raises:
        MalformedResponse: The reply is empty, not a JSON object, or misses
            one of ``label``, ``confidence`` and ``reasoning``.
    """
    cleaned = strip_code_fence(text or "")
    if not cleaned:
        raise MalformedResponse("Classification response is empty.")

    try:
        data = json.loads(cleaned)
    except ValueError as e:
        # JSONDecodeError, or an integer literal past the int conversion limit
        raise MalformedResponse(f"Classification response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponse("Classification response is not a JSON object.")

    return RawClassification(
        label=_require_text(data, "label"),
        confidence=_require_confidence(data),
        reasoning=_require_text(data, "reasoning"),
    )
