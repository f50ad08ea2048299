"""
Field codec

Converts structured title fields (genre lists, season maps) to and from the
JSON text stored in the database.

Season maps are keyed by season number. JSON object keys are always strings,
so decoding turns canonical integer keys of the outer map back into ints.
Nested objects are returned as stored:

    >>> decode(encode({1: {"episodes": [1, 2]}}))
    {1: {'episodes': [1, 2]}}
"""
import json
import logging
from typing import Any, Optional

from watchlog.core.exceptions import DecodeFailure

logger = logging.getLogger("watchlog.codec")


def _to_jsonable(value: Any) -> Any:
    if hasattr(value, "model_dump"):
        return value.model_dump()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


def _season_key(key: str) -> Any:
    if key.isdecimal() and str(int(key)) == key:
        return int(key)
    return key


def _restore_keys(value: Any) -> Any:
    # Only the outer map is keyed by season number
    if isinstance(value, dict):
        return {_season_key(k): v for k, v in value.items()}
    return value


def encode(value: Any) -> Optional[str]:
    """Encode a structured value as JSON text; None stays None."""
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False, default=_to_jsonable)


def parse(text: Any) -> Any:
    """
    Strict decode

    Raises:
        DecodeFailure: text is not valid JSON
    """
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8", errors="replace")
    try:
        return _restore_keys(json.loads(text))
    except (ValueError, TypeError, RecursionError) as e:
        raise DecodeFailure(f"Unparsable JSON field: {e}", raw=str(text)[:200])


def decode(text: Any) -> Any:
    """
    Decode stored JSON text.

    Returns None for null/empty input and for malformed data; never raises.
    """
    if text is None or text == "" or text == b"":
        return None
    try:
        return parse(text)
    except DecodeFailure as e:
        logger.warning(f"Dropping malformed stored value: {e} (raw={e.raw!r})")
        return None
