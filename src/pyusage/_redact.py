"""Helpers for safe debug logging.

Outgoing hits carry the tracking id and a persistent client id. This
module redacts them before payloads are written to DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset({"cid", "tid", "uid", "clientid"})


def redact_for_log(value: Mapping[str, Any], *, max_string: int = 256) -> dict[str, Any]:
    """Return a redacted copy of a flat payload suitable for debug logs."""
    redacted: dict[str, Any] = {}
    for k, v in value.items():
        key = str(k)
        if key.lower() in _SENSITIVE_VALUE_KEYS:
            redacted[key] = "<redacted>"
        elif isinstance(v, str) and len(v) > max_string:
            redacted[key] = f"{v[:max_string]}…<truncated>"
        else:
            redacted[key] = v
    return redacted
