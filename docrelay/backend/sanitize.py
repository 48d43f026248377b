"""Recovery of JSON objects embedded in backend string replies.

The backend sometimes wraps its JSON payload in log lines or other text.
The object is taken to span from the first '{' to the last '}'; nested
braces inside string values or several objects in one reply are not
handled.
"""

import json
import logging
import math
from typing import Any

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _finite_float(value: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Number out of range: {value}")
    return number


def loads_strict(text: str) -> Any:
    """Parse JSON, rejecting NaN, Infinity and out-of-range numbers.

    Raises:
        ValueError: If the text is not standard JSON.
    """
    return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)


def extract_embedded_json(text: str) -> Any:
    """Parse the JSON object embedded in a string reply.

    Args:
        text: Raw reply from the backend.

    Returns:
        The parsed value, or the original text when no object could be found
        or the extracted span is not valid JSON.
    """
    start = text.find("{")
    end = text.rfind("}")

    if start == -1 or end <= start:
        logger.info("No JSON object found in backend reply, passing it through")
        return text

    try:
        parsed = loads_strict(text[start : end + 1])
    except ValueError as e:
        logger.warning(f"Failed to parse JSON embedded in backend reply: {e}")
        return text

    logger.info("Recovered JSON object from backend string reply")
    return parsed


def sanitize_body(body: Any) -> Any:
    """Apply embedded-JSON recovery to string bodies; pass others through."""
    if isinstance(body, str):
        return extract_embedded_json(body)
    return body
