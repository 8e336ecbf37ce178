"""Timeout configuration for the transport.

This module centralizes the timeout values used when talking to vendors.
Every value applies to a single attempt: the retry loop starts a fresh
budget for each try.

get_timeout_config()
    Returns a process-cached configuration, re-parsing environment overrides
    only when they change. Supported environment variables (all optional):
        PT_TIMEOUT_START_SECONDS     connect / first-byte budget
        PT_TIMEOUT_STREAM_SECONDS    read timeout between streamed chunks
        PT_TIMEOUT_HTTP_SECONDS      whole non-streaming request
        LLM_BRIDGE_START_TIMEOUT_SECONDS (compat alias for START)
"""
from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Budget for establishing the connection and
            receiving response headers.
        stream_timeout_seconds: Idle timeout while waiting for the next chunk
            of a streamed response.
        http_timeout_seconds: Timeout for a non-streaming request.
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 120.0
    http_timeout_seconds: float = 30.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None
_ENV_NAMES = (
    "PT_TIMEOUT_START_SECONDS",
    "LLM_BRIDGE_START_TIMEOUT_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
    "PT_TIMEOUT_HTTP_SECONDS",
)


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance.

    Start timeout precedence: ``PT_TIMEOUT_START_SECONDS`` then
    ``LLM_BRIDGE_START_TIMEOUT_SECONDS``.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    defaults = TimeoutConfig()
    start = _parse_env_float(
        "PT_TIMEOUT_START_SECONDS",
        _parse_env_float("LLM_BRIDGE_START_TIMEOUT_SECONDS", defaults.start_timeout_seconds),
    )
    _CACHED = TimeoutConfig(
        start_timeout_seconds=start,
        stream_timeout_seconds=_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", defaults.stream_timeout_seconds),
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
