"""Lenient JSON extraction from model output.

Models wrap JSON in markdown fences or surround it with commentary. The
extractor tries an ordered list of strategies and returns the first candidate:

1. Fenced code block (```json ... ```), language tag optional
2. Span from the first '{' to the last '}'
3. The whole trimmed text

The parser then applies strict json.loads to that candidate.
"""

import json
import re
from typing import Any, Callable, Optional

from src.utils.errors import MalformedModelOutput
from src.utils.logger import logger

_FENCED_BLOCK = re.compile(r"```[\w+-]*\s*([\s\S]*?)```", re.IGNORECASE)

ExtractionStrategy = Callable[[str], Optional[str]]


def fenced_block(text: str) -> Optional[str]:
    """Return the trimmed content of the first fenced code block, if any."""
    match = _FENCED_BLOCK.search(text)
    if match:
        content = match.group(1).strip()
        if content:
            return content
    return None


def brace_span(text: str) -> Optional[str]:
    """Return the text between the first '{' and the last '}' inclusive."""
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last != -1 and last > first:
        return text[first:last + 1].strip()
    return None


def whole_text(text: str) -> Optional[str]:
    return text.strip()


EXTRACTION_STRATEGIES: list[ExtractionStrategy] = [fenced_block, brace_span, whole_text]


def extract_json_candidate(text: str) -> str:
    """Isolate the JSON payload candidate in model output.

    Never raises: the candidate is not guaranteed to be valid JSON.

    Args:
        text: Raw model output.

    Returns:
        The first candidate produced by EXTRACTION_STRATEGIES.
    """
    for strategy in EXTRACTION_STRATEGIES:
        candidate = strategy(text)
        if candidate is not None:
            logger.debug(f"JSON candidate selected by '{strategy.__name__}' ({len(candidate)} chars)")
            return candidate
    return text.strip()


def parse_json_from_text(raw: Optional[str]) -> Any:
    """Parse the JSON payload embedded in model output.

    Args:
        raw: Raw model output. None is treated as an empty string.

    Returns:
        The decoded JSON value.

    Raises:
        MalformedModelOutput: If the candidate is not valid JSON. The error
            embeds the decoder message and the full raw text.
    """
    raw_text = raw or ""
    candidate = extract_json_candidate(raw_text.strip())

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedModelOutput(str(e), raw_text=raw_text, candidate=candidate) from e
