"""Shared HTTP client pool for vendor adapters.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances to avoid per-call allocations and reduce connection overhead.
    Concurrent conversations share connections, never request state.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - Pooled clients carry no default timeout; every request passes the
      per-attempt budget from :func:`attempt_timeout` so a retry always
      starts with a fresh timeout.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose)``. Purposes allow distinct
      pools (e.g., "chat" vs "stream").
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from contextlib import suppress
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import TimeoutConfig, get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL. ``None`` groups clients under a
            shared key; callers then send absolute URLs.
        purpose: A short string discriminating separate pools (e.g.,
            "chat", "stream"). Keep stable to maximize reuse.

    Returns:
        A reusable ``httpx.Client`` instance.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(base_url=base_url) if base_url else httpx.Client()
        _CLIENTS[key] = client
        return client


def attempt_timeout(streaming: bool, cfg: Optional[TimeoutConfig] = None) -> httpx.Timeout:
    """Build the ``httpx.Timeout`` for one attempt.

    Streaming attempts bound the connect phase by the start timeout and the
    gap between chunks by the stream timeout; non-streaming attempts use the
    HTTP timeout throughout.
    """
    cfg = cfg or get_timeout_config()
    if streaming:
        return httpx.Timeout(cfg.stream_timeout_seconds, connect=cfg.start_timeout_seconds)
    return httpx.Timeout(cfg.http_timeout_seconds)


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # Pool teardown failures at shutdown are non-actionable.
            with suppress(Exception):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "attempt_timeout", "close_all_clients"]
