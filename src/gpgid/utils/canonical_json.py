"""
Canonical JSON serialization for the type registry.
Identical values always produce identical bytes.
"""

import json
from typing import Any

from ..config import JSON_SEPARATORS, JSON_SORT_KEYS, JSON_ENSURE_ASCII


def canonicalize(obj: Any) -> str:
    """
    Serialize an object to canonical JSON.

    Canonical properties:
    - Keys are sorted
    - No whitespace
    - NaN and Infinity are rejected

    Args:
        obj: Python object to serialize

    Returns:
        Canonical JSON string

    Raises:
        TypeError: If object is not JSON-serializable
    """
    try:
        return json.dumps(
            obj,
            separators=JSON_SEPARATORS,
            sort_keys=JSON_SORT_KEYS,
            ensure_ascii=JSON_ENSURE_ASCII,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise TypeError(f"Object not JSON-serializable: {e}")


def canonicalize_bytes(obj: Any) -> bytes:
    """Serialize an object to canonical JSON as UTF-8 bytes."""
    return canonicalize(obj).encode('utf-8')


def parse(data) -> Any:
    """
    Parse JSON text or UTF-8 bytes into a Python object.

    Raises:
        ValueError: If the input is not valid JSON
    """
    try:
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode('utf-8')
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid JSON: {e}")
