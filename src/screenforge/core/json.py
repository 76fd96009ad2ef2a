"""Fast JSON decoding and encoding for documents, blueprints and assistant replies."""

from typing import Any
import json
import sys

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```) if present."""
    if "```" not in text:
        return text

    if "```json" in text:
        start = text.find("```json") + 7
    else:
        start = text.find("```") + 3

    end = text.find("```", start)
    if end == -1:
        return text[start:].strip()
    return text[start:end].strip()


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Extract and parse the JSON object embedded in text.

    Assistant replies often wrap the payload in prose or a code fence, so the
    outermost ``{...}`` span is decoded. Decoding cascades msgspec → stdlib →
    json_repair; the repair step only runs when ``repair`` is True.

    Args:
        text: Text containing a JSON object
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If no object can be decoded
    """
    working = strip_code_fence(text.strip())

    start = working.find("{")
    end = working.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise JSONParseError("No JSON object found in text")

    json_str = working[start : end + 1]

    try:
        result = msgspec.json.decode(json_str.encode("utf-8"))
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e)
    else:
        return _expect_object(result)

    try:
        return _expect_object(json.loads(json_str))
    except json.JSONDecodeError:
        pass

    try:
        repaired = repair_json(json_str)
        return _expect_object(json.loads(repaired))
    except (ValueError, TypeError) as repair_error:
        raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error)


def decode_object(text: str) -> dict[str, Any]:
    """
    Decode text that must be exactly one JSON object.

    Unlike :func:`extract_json`, surrounding prose, code fences or trailing
    content are rejected.

    Raises:
        JSONParseError: If the text is not a single JSON object
    """
    try:
        result = msgspec.json.decode(text.strip().encode("utf-8"))
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e)
    return _expect_object(result)


def _expect_object(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise JSONParseError(f"Expected JSON object, got {type(value).__name__}")
    return value


def safe_json_dumps(obj: Any, indent: int = 0) -> str:
    """
    Encode object to JSON string using the fastest available library.

    Args:
        obj: Object to encode
        indent: Indentation for pretty output (0 = compact)

    Returns:
        JSON string
    """
    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError):
            # integers outside 64-bit range and similar edge cases
            pass

        try:
            return msgspec.json.encode(obj).decode("utf-8")
        except (TypeError, ValueError):
            pass

        return json.dumps(obj, ensure_ascii=False)

    if indent == 2:
        try:
            return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")
        except (TypeError, ValueError):
            pass

    return json.dumps(obj, indent=indent, ensure_ascii=False)


def validate_json_size(data: str, max_size: int, name: str = "JSON") -> None:
    """
    Validate raw JSON size before decoding.

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = sys.getsizeof(data)
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = 40, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent runaway recursion.

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise JSONParseError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)
