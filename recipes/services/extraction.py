"""
Best-effort JSON recovery from free-text model output.

Models wrap JSON in prose, markdown fences or both. Each strategy below
returns a candidate substring (or None); candidates are tried in order,
then the raw text itself, and the first one that parses to the wanted
type wins.
"""

import json
import logging
import re
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Strategy = Callable[[str], Optional[str]]

_FENCED_JSON = re.compile(r"```json\s*\n(.*?)\n?```", flags=re.S | re.I)
_FENCED_PLAIN = re.compile(r"```\s*\n(.*?)\n?```", flags=re.S)
_FENCE_MARKERS = re.compile(r"```(?:json)?\s*", flags=re.I)


def fenced_json_block(text: str) -> Optional[str]:
    m = _FENCED_JSON.search(text)
    return m.group(1) if m else None


def fenced_plain_block(text: str) -> Optional[str]:
    m = _FENCED_PLAIN.search(text)
    return m.group(1) if m else None


def _delimited(opening: str, closing: str) -> Strategy:
    """First `opening` to last `closing`, inclusive."""
    def strategy(text: str) -> Optional[str]:
        start = text.find(opening)
        end = text.rfind(closing)
        if start == -1 or end <= start:
            return None
        return text[start:end + 1]
    strategy.__name__ = f"delimited_{opening}{closing}"
    return strategy


bracketed_array = _delimited("[", "]")
braced_object = _delimited("{", "}")

ARRAY_STRATEGIES: tuple[Strategy, ...] = (fenced_json_block, fenced_plain_block, bracketed_array)
OBJECT_STRATEGIES: tuple[Strategy, ...] = (fenced_json_block, fenced_plain_block, braced_object)


def strip_fences(text: str) -> str:
    return _FENCE_MARKERS.sub("", text or "").strip()


def _candidates(text: str, strategies):
    for strategy in strategies:
        candidate = strategy(text)
        if candidate is not None:
            yield strategy.__name__, candidate
    yield "raw", text


def extract_json(text: str, strategies, expected: type):
    """
    Run `strategies` over `text` and return the first candidate that parses
    to an instance of `expected`, or None when nothing does.
    """
    if not text:
        return None
    for name, candidate in _candidates(text, strategies):
        cleaned = strip_fences(candidate)
        # a fenced block may still hold prose around the payload
        if name.startswith("fenced"):
            inner = (bracketed_array if expected is list else braced_object)(cleaned)
            if inner is not None:
                cleaned = inner
        try:
            data = json.loads(cleaned)
        except (TypeError, ValueError):
            continue
        if isinstance(data, expected):
            return data
    logger.info("No %s recoverable from model output (%d chars).", expected.__name__, len(text))
    return None


def extract_json_array(text: str) -> Optional[list]:
    return extract_json(text, ARRAY_STRATEGIES, list)


def extract_json_object(text: str) -> Optional[dict]:
    return extract_json(text, OBJECT_STRATEGIES, dict)
