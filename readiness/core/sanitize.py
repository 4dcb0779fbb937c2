"""Turn raw model text into a JSON object."""
from __future__ import annotations

import json
import re
from typing import Any

from readiness.domain.errors import ResponseFormatError

_LEADING_FENCE = re.compile(r"^\s*```[a-zA-Z0-9_-]*\s*")
_TRAILING_FENCE = re.compile(r"\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if any, and trim."""
    cleaned = _LEADING_FENCE.sub("", text, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _outer_object(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def parse_model_json(text: str) -> dict[str, Any]:
    """Parse model output as a JSON object.

    The text is first stripped of code fences. When it still does not parse,
    the outermost ``{...}`` span is tried, which recovers answers wrapped in
    prose. Anything else raises :class:`ResponseFormatError` with the raw
    text attached.
    """

    cleaned = strip_code_fences(text or "")
    candidates = [cleaned]
    outer = _outer_object(cleaned)
    if outer is not None and outer != cleaned:
        candidates.append(outer)

    last_error: json.JSONDecodeError | None = None
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as exc:
            last_error = exc
            continue
        if isinstance(parsed, dict):
            return parsed
        raise ResponseFormatError(
            f"AI response was JSON but not an object ({type(parsed).__name__})",
            raw_text=text,
        )

    message = f"AI response was not valid JSON: {last_error}" if last_error else "AI response was empty"
    raise ResponseFormatError(message, raw_text=text)
