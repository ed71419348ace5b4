"""Query parameter masking for debug logs.

Catalog requests carry the API key in the query string, so request
parameters go through :func:`redact_params` before they are logged.
"""

from __future__ import annotations

from collections.abc import Mapping

_SECRET_PARAMS: frozenset[str] = frozenset({"apikey", "api_key", "key", "token", "access_token"})

_MASK = "<redacted>"


def redact_params(params: Mapping[str, str], *, max_value: int = 128) -> dict[str, str]:
    """Return a copy of *params* with secrets masked and long values cut."""
    redacted: dict[str, str] = {}
    for name, value in params.items():
        if name.lower() in _SECRET_PARAMS:
            redacted[name] = _MASK
        elif len(value) > max_value:
            redacted[name] = f"{value[:max_value]}…<truncated>"
        else:
            redacted[name] = value
    return redacted
