"""HTTP transport: the only component of the engine that performs I/O.

Purpose:
    Send a :class:`WireRequest` over a pooled ``httpx.Client`` and return the
    raw response. Streaming attempts forward every received chunk to a sink
    while accumulating the full body for a conclusive re-parse.

Retry policy:
    - Streaming calls only. Transient failures (connection errors, timeouts,
      429/502/503/504) are retried by :func:`retry` with ``delay_base **
      attempt`` backoff; every other failure surfaces on the first attempt.
    - Chunks already delivered to the sink by a failed attempt are not rolled
      back. ``on_attempt`` tells the caller a new attempt is starting so live
      consumers can reset their parse state.

Timeouts:
    Per attempt via :func:`attempt_timeout`, so a retry starts with a fresh
    budget.

Cancellation:
    A :class:`CancellationToken` closes the live response when cancelled and
    is checked between chunks. ``CancelledError`` is never retried.
"""

from __future__ import annotations

import dataclasses
import itertools
import json
import logging
from typing import Callable, Dict, Optional

import httpx

from ..adapter_base import error_message_from_body
from ..cancellation import CancellationToken, CancelledError
from ..errors import ErrorCode, ProviderError, TransportError, code_for_status
from ..errors_parts.classification import TRANSIENT_CODES
from ..http import attempt_timeout, get_httpx_client
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import WireRequest, WireResponse
from ..resilience.retry import DEFAULT_RETRY_CONFIG, NO_RETRY, RetryConfig, retry
from ..timeouts import TimeoutConfig

ChunkSink = Callable[[bytes], None]
HttpErrorMapper = Callable[[int, bytes], ProviderError]


def default_http_error(vendor: str) -> HttpErrorMapper:
    """Map an error status to ``ProviderError`` without vendor knowledge."""

    def _map(status: int, body: bytes) -> ProviderError:
        message = None
        try:
            message = error_message_from_body(json.loads(body.decode("utf-8"))) if body else None
        except ValueError:
            message = None
        code = code_for_status(status)
        return ProviderError(
            code=code,
            message=f"{vendor} API error (HTTP {status}): {message or 'no error body'}",
            provider=vendor,
            retryable=code in TRANSIENT_CODES,
            status=status,
        )

    return _map


class HttpTransport:
    """Blocking and streaming HTTP sender with bounded streaming retries.

    Parameters:
        retry_config: Policy for streaming calls; non-streaming calls always
            use a single attempt.
        client: Optional ``httpx.Client`` (tests pass one built on
            ``httpx.MockTransport``). Defaults to the shared pool.
        http_error: Maps ``(status, body)`` to the error raised for HTTP
            status >= 400; adapters supply their own to read vendor messages.
        timeouts: Optional :class:`TimeoutConfig` overriding the environment.
    """

    def __init__(
        self,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
        *,
        client: Optional[httpx.Client] = None,
        http_error: Optional[HttpErrorMapper] = None,
        timeouts: Optional[TimeoutConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.retry_config = retry_config
        self._client = client
        self._http_error = http_error
        self._timeouts = timeouts
        self._logger = logger or get_logger("llm_bridge.transport")

    # ----- public API -----
    def send(
        self,
        request: WireRequest,
        streaming: bool,
        sink: Optional[ChunkSink] = None,
        cancel: Optional[CancellationToken] = None,
        on_attempt: Optional[Callable[[int], None]] = None,
    ) -> bytes:
        """Send ``request`` and return the raw response body."""
        return self.exchange(request, streaming, sink, cancel, on_attempt).body

    def exchange(
        self,
        request: WireRequest,
        streaming: bool,
        sink: Optional[ChunkSink] = None,
        cancel: Optional[CancellationToken] = None,
        on_attempt: Optional[Callable[[int], None]] = None,
    ) -> WireResponse:
        """Like :meth:`send` but return status, headers and body."""
        ctx = LogContext(provider=request.vendor, model=request.model)
        base = self.retry_config if streaming else NO_RETRY
        config = dataclasses.replace(base, attempt_logger=self._attempt_logger(ctx, streaming))
        counter = itertools.count()

        @retry(config)
        def _attempt() -> WireResponse:
            number = next(counter)
            if cancel is not None:
                cancel.raise_if_cancelled()
            if on_attempt is not None:
                on_attempt(number)
            return self._send_once(request, streaming, sink, cancel)

        return _attempt()

    # ----- internals -----
    def _client_for(self, streaming: bool) -> httpx.Client:
        if self._client is not None:
            return self._client
        return get_httpx_client(None, "stream" if streaming else "chat")

    def _send_once(
        self,
        request: WireRequest,
        streaming: bool,
        sink: Optional[ChunkSink],
        cancel: Optional[CancellationToken],
    ) -> WireResponse:
        client = self._client_for(streaming)
        timeout = attempt_timeout(streaming, self._timeouts)
        json_body = request.body if request.method != "GET" else None
        try:
            if streaming:
                return self._stream_once(client, request, json_body, timeout, sink, cancel)
            response = client.request(
                request.method, request.url, headers=request.headers, json=json_body, timeout=timeout
            )
        except httpx.TimeoutException as exc:
            raise self._transport_error(ErrorCode.TIMEOUT, request, exc) from exc
        except (httpx.TransportError, httpx.StreamError) as exc:
            if cancel is not None and cancel.cancelled:
                raise CancelledError(cancel.reason or "operation cancelled") from exc
            raise self._transport_error(ErrorCode.TRANSIENT, request, exc) from exc
        self._raise_for_status(request, response.status_code, response.content)
        return WireResponse(status=response.status_code, body=response.content, headers=dict(response.headers))

    def _stream_once(
        self,
        client: httpx.Client,
        request: WireRequest,
        json_body: Optional[Dict],
        timeout: httpx.Timeout,
        sink: Optional[ChunkSink],
        cancel: Optional[CancellationToken],
    ) -> WireResponse:
        with client.stream(
            request.method, request.url, headers=request.headers, json=json_body, timeout=timeout
        ) as response:
            if response.status_code >= 400:
                self._raise_for_status(request, response.status_code, response.read())
            unregister = cancel.on_cancel(response.close) if cancel is not None else None
            chunks = []
            try:
                for chunk in response.iter_bytes():
                    if cancel is not None:
                        cancel.raise_if_cancelled()
                    if not chunk:
                        continue
                    chunks.append(chunk)
                    if sink is not None:
                        sink(chunk)
            finally:
                if unregister is not None:
                    unregister()
            if cancel is not None:
                cancel.raise_if_cancelled()
            return WireResponse(status=response.status_code, body=b"".join(chunks), headers=dict(response.headers))

    def _raise_for_status(self, request: WireRequest, status: int, body: bytes) -> None:
        if status < 400:
            return
        mapper = self._http_error or default_http_error(request.vendor)
        error = mapper(status, body)
        if error.model is None:
            error.model = request.model
        raise error

    def _transport_error(self, code: ErrorCode, request: WireRequest, exc: Exception) -> TransportError:
        return TransportError(
            code=code,
            message=f"{request.vendor} transport failure: {exc.__class__.__name__}: {exc}",
            provider=request.vendor,
            model=request.model,
            retryable=True,
            raw=exc,
        )

    def _attempt_logger(self, ctx: LogContext, streaming: bool):
        logger = self._logger

        def _log(*, attempt: int, max_attempts: int, delay: float | None, error: ProviderError | None) -> None:
            normalized_log_event(
                logger,
                "transport.attempt",
                ctx,
                phase="stream" if streaming else "request",
                attempt=attempt + 1,
                error_code=getattr(error.code, "value", None) if error else None,
                emitted=error is None,
                tokens=None,
                level=logging.WARNING if error else logging.INFO,
                max_attempts=max_attempts,
                retry_in=delay,
                status=error.status if error else None,
            )

        return _log


__all__ = ["HttpTransport", "ChunkSink", "HttpErrorMapper", "default_http_error"]
