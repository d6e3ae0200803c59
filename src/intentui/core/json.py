"""Fast, deterministic JSON encoding and decoding."""

from typing import Any
import json

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()


def decode_json_value(text: str) -> Any:
    """
    Decode any JSON value (object, array, string, number, literal).

    Args:
        text: JSON text

    Returns:
        Decoded Python value

    Raises:
        JSONParseError: If the text is not valid JSON
    """
    try:
        return _decoder.decode(text.strip().encode("utf-8"))
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string.

    Compact output matches JavaScript's ``JSON.stringify`` (no whitespace,
    keys in insertion order), so compiled attribute values stay stable.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, orjson.JSONEncodeError):
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

    # Use stdlib for pretty-printed output or as fallback (most compatible)
    if indent > 0:
        return json.dumps(obj, indent=indent, ensure_ascii=False)
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
