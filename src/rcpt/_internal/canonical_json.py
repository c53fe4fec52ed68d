"""Canonical JSON text form for receipts.

One function produces the bytes written to disk, so every receipt has the
same layout regardless of who wrote it.
"""

import json
from typing import Any


def pretty_dumps(obj: Any) -> str:
    """
    Canonical pretty-printed JSON serialization.

    Rules:
    - UTF-8 text (no ASCII escaping)
    - Key order is insertion order (model field declaration order)
    - Two-space indentation, default separators
    - Exactly one trailing newline
    - NaN/Infinity rejected

    Args:
        obj: JSON-compatible Python object

    Returns:
        Canonical JSON string

    Raises:
        TypeError: If obj contains non-JSON types
        ValueError: If obj contains out-of-range floats
    """
    return json.dumps(
        obj,
        indent=2,
        ensure_ascii=False,
        allow_nan=False,
    ) + "\n"
