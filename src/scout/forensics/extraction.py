"""Recovery of JSON from language model output.

Model output is nominally JSON but is often wrapped in prose or a
fenced code block.
"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json|JSON)?[ \t]*\n?(.*?)```", re.DOTALL)

_CLOSING = {"{": "}", "[": "]"}


def _try_parse(candidate: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(candidate)
    except (TypeError, ValueError):
        return False, None


def _bracketed(text: str) -> str | None:
    """Substring from the first opening bracket to its last closing match."""
    openings = [(text.find(opener), opener) for opener in _CLOSING if opener in text]
    if not openings:
        return None
    start, opener = min(openings)
    end = text.rfind(_CLOSING[opener])
    if end <= start:
        return None
    return text[start : end + 1]


def extract_json(text: Any) -> Any:
    """Parse JSON out of model output.

    Tries, in order: the whole text, the contents of a fenced code block,
    and the span between the first opening bracket and the last matching
    closing bracket.

    Returns:
        The parsed value, or None when no usable JSON was found
    """
    if not isinstance(text, str) or not text.strip():
        return None

    ok, value = _try_parse(text.strip())
    if ok:
        return value

    fence = _FENCE_RE.search(text)
    if fence:
        ok, value = _try_parse(fence.group(1).strip())
        if ok:
            return value

    span = _bracketed(text)
    if span is not None:
        ok, value = _try_parse(span)
        if ok:
            return value

    logger.debug("No usable JSON in model output", extra={"text_length": len(text)})
    return None
