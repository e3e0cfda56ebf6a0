"""Locate the JSON object embedded in a free-text model reply."""

import json
from typing import Any

_decoder = json.JSONDecoder()


def extract_json_object(text: str) -> dict[str, Any] | None:
    """
    Return the first syntactically complete top-level JSON object in ``text``.

    Each ``{`` is tried in order with an incremental decoder, so prose, code
    fences or stray braces before the object are skipped, and anything after
    the object's closing brace is ignored. Braces nested inside the first
    complete object are never returned on their own.

    Args:
        text: Raw model reply

    Returns:
        Parsed object, or None if no candidate decodes
    """
    start = text.find("{")
    while start != -1:
        try:
            obj, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        return obj
    return None
