from __future__ import annotations

import json
from typing import Any


def safe_json_loads(raw: Any) -> Any:
    """Best-effort JSON loader for persisted values.

    Accepts str/bytes; returns the decoded object or None for empty or
    undecodable input.
    """
    if raw is None:
        return None

    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")

    if not isinstance(raw, str):
        return raw

    if not raw.strip():
        return None

    try:
        return json.loads(raw)
    except ValueError:
        return None


def safe_json_loads_str_list(raw: Any) -> list[str] | None:
    """Decode a JSON array of strings.

    Returns None when the payload is missing or not a list; non-string
    entries are dropped.
    """
    obj = safe_json_loads(raw)
    if not isinstance(obj, list):
        return None
    return [item for item in obj if isinstance(item, str)]
