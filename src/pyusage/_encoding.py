"""Form encoding of outgoing hit parameters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

# Characters left unescaped in addition to ``A-Za-z0-9_.-~``.
_SAFE = "!*'()"


def post_encode(parameters: Mapping[str, Any]) -> str:
    """Encode *parameters* as ``k=v&k=v``.

    Values are percent-encoded (space becomes ``%20``); keys are emitted
    as-is. Entry order follows the mapping.
    """
    return "&".join(f"{key}={quote(str(value), safe=_SAFE)}" for key, value in parameters.items())
