"""
Stable JSON serialization for byte-identical manifests.

Identical manifests always produce identical bytes: 2-space indentation,
fields in model declaration order, UTF-8, LF newlines, trailing newline.
"""

from __future__ import annotations

from typing import Any

import orjson

from treesum.errors import SerializationError

JSON_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Serialize object to pretty-printed JSON bytes.

    Args:
        obj: Object to serialize.

    Returns:
        UTF-8 JSON with 2-space indentation and a trailing newline.

    Raises:
        SerializationError: If the object cannot be encoded.

    Examples:
        >>> canonical_json_bytes([])
        b'[]\\n'
    """
    try:
        return orjson.dumps(obj, option=JSON_OPTIONS)
    except orjson.JSONEncodeError as e:
        raise SerializationError(
            "Failed to marshal checksums to JSON", original_error=e
        ) from e


def canonical_json_dumps(obj: Any) -> str:
    """Serialize object to a pretty-printed JSON string."""
    return canonical_json_bytes(obj).decode("utf-8")


def canonical_json_loads(data: str | bytes) -> Any:
    """
    Parse JSON text.

    Examples:
        >>> canonical_json_loads('[{"path": "a.txt"}]')
        [{'path': 'a.txt'}]
    """
    return orjson.loads(data)
