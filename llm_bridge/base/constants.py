"""Base shared constants for vendor adapters.

Central location to avoid scattering magic strings.

Security
--------
This module contains only generic sentinel strings. There are no credentials
or tokens embedded.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

USER_AGENT = "llm-bridge/0.1.0"

__all__ = [
    "MISSING_API_KEY_ERROR",
    "USER_AGENT",
]
