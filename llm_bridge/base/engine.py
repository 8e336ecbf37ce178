"""LLMEngine: one vendor, one conversation turn at a time.

Purpose:
    Tie the pieces together for a single vendor: settings lookup, adapter
    encode, transport send, SSE parse, adapter decode and continuation.

Failure semantics:
    - ``ConfigurationError`` (missing key, invalid request) and
      ``MissingContinuationState`` surface unchanged; nothing was sent.
    - ``CancelledError`` surfaces unchanged.
    - Every other failure of a turn is wrapped: ``NoContentError`` when no
      byte reached the chunk sink, ``PartialContentError`` when some did.
      The original error is kept as ``cause``.

The engine keeps no conversation state; ``ContinuationState`` values are
returned to and owned by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Iterable, List, Optional, Union

from .adapter_base import BaseVendorAdapter
from .cancellation import CancellationToken
from .continuation import ContinuationManager, ContinuationState, ToolResultLike
from .diagnostics import DiagnosticsSink, logger_diagnostics
from .dto import VendorSettings
from .errors import (
    ConfigurationError,
    MissingContinuationState,
    NoContentError,
    PartialContentError,
    ProviderError,
    TurnFailedError,
)
from .factory import AdapterFactory
from .interfaces import SettingsProvider
from .logging import LogContext, get_logger, normalized_log_event
from .models import CanonicalRequest, CanonicalResponse, ModelInfo, WireResponse
from .resilience.retry import RetryConfig
from .settings import ConfigSettingsProvider, StaticSettingsProvider
from .sse import SSEParser, StreamEvent
from .transport import HttpTransport

ChunkSink = Callable[[bytes], None]
EventSink = Callable[[StreamEvent], None]

# Raised before anything is sent, or already wrapped.
_PASSTHROUGH = (ConfigurationError, MissingContinuationState, TurnFailedError)


class _LiveSink:
    """Forward chunks to the caller, count them, and optionally parse live.

    The live parser only feeds ``event_sink``; the returned response always
    comes from a conclusive parse of the final attempt's full body.
    """

    def __init__(self, chunk_sink: Optional[ChunkSink], event_sink: Optional[EventSink]) -> None:
        self._chunk_sink = chunk_sink
        self._event_sink = event_sink
        self._chunks: List[bytes] = []
        self._parser: Optional[SSEParser] = SSEParser() if event_sink else None

    def __call__(self, chunk: bytes) -> None:
        self._chunks.append(chunk)
        if self._chunk_sink is not None:
            self._chunk_sink(chunk)
        if self._parser is not None and self._event_sink is not None:
            for event in self._parser.feed(chunk):
                self._event_sink(event)

    def new_attempt(self, attempt: int) -> None:
        if attempt and self._event_sink is not None:
            self._parser = SSEParser()

    @property
    def bytes_streamed(self) -> int:
        return sum(len(c) for c in self._chunks)

    def content(self) -> bytes:
        return b"".join(self._chunks)


class LLMEngine:
    """Canonical request/response facade over one vendor adapter.

    Parameters:
        vendor: Canonical vendor name (``openai``, ``anthropic``...).
        settings: A :class:`SettingsProvider` or fixed :class:`VendorSettings`.
            Defaults to :class:`ConfigSettingsProvider`.
        transport: Optional :class:`HttpTransport` (tests inject one backed by
            ``httpx.MockTransport``).
        diagnostics: Sink for non-fatal decode findings; defaults to the
            ``llm_bridge.diagnostics`` logger.
        adapter: Optional adapter instance overriding the registry lookup.
        continuation: Optional :class:`ContinuationManager`.
    """

    def __init__(
        self,
        vendor: str,
        settings: Union[SettingsProvider, VendorSettings, None] = None,
        transport: Optional[HttpTransport] = None,
        diagnostics: Optional[DiagnosticsSink] = None,
        adapter: Optional[BaseVendorAdapter] = None,
        continuation: Optional[ContinuationManager] = None,
    ) -> None:
        self.vendor = vendor.lower().strip()
        if isinstance(settings, VendorSettings):
            settings = StaticSettingsProvider({self.vendor: settings})
        self._settings_provider: SettingsProvider = settings or ConfigSettingsProvider()
        self._diagnostics = diagnostics or logger_diagnostics()
        self.adapter = adapter or AdapterFactory.create(self.vendor, diagnostics=self._diagnostics)
        self._transport = transport
        self.continuation = continuation or ContinuationManager()
        self._logger = get_logger("llm_bridge.engine")

    # ----- settings / wiring -----
    def settings(self) -> VendorSettings:
        return self._settings_provider.get(self.vendor)

    def transport_for(self, settings: VendorSettings) -> HttpTransport:
        """Return the injected transport or one configured from ``settings``."""
        if self._transport is not None:
            return self._transport
        return HttpTransport(
            RetryConfig.from_mapping(settings.extra.get("retry")),
            http_error=self.adapter.http_error,
        )

    def _prepare(self, request: CanonicalRequest, stream: bool, settings: VendorSettings) -> CanonicalRequest:
        changes: dict[str, Any] = {}
        if request.stream != stream:
            changes["stream"] = stream
        if not request.model and settings.extra.get("model"):
            changes["model"] = str(settings.extra["model"])
        return replace(request, **changes) if changes else request

    # ----- turns -----
    def request(self, request: CanonicalRequest, cancel: Optional[CancellationToken] = None) -> CanonicalResponse:
        """Run one non-streaming turn."""
        settings = self.settings()
        request = self._prepare(request, False, settings)
        wire = self.adapter.encode(request, settings)
        ctx = LogContext(provider=self.vendor, model=request.model)
        try:
            raw = self.transport_for(settings).exchange(wire, streaming=False, cancel=cancel)
            response = self.adapter.decode(raw)
        except _PASSTHROUGH:
            raise
        except ProviderError as exc:
            raise self._turn_failed(exc, None, ctx) from exc
        self._log_turn(ctx, response, streamed=False)
        return response

    def stream_request(
        self,
        request: CanonicalRequest,
        chunk_sink: Optional[ChunkSink] = None,
        cancel: Optional[CancellationToken] = None,
        event_sink: Optional[EventSink] = None,
    ) -> CanonicalResponse:
        """Run one streaming turn.

        ``chunk_sink`` receives the raw vendor bytes as they arrive and
        ``event_sink`` (optional) the parsed events of the current attempt.
        """
        settings = self.settings()
        request = self._prepare(request, True, settings)
        wire = self.adapter.encode(request, settings)
        ctx = LogContext(provider=self.vendor, model=request.model)
        live = _LiveSink(chunk_sink, event_sink)
        try:
            body = self.transport_for(settings).send(
                wire, streaming=True, sink=live, cancel=cancel, on_attempt=live.new_attempt
            )
            response = self._decode_stream_body(body)
        except _PASSTHROUGH:
            raise
        except ProviderError as exc:
            raise self._turn_failed(exc, live, ctx) from exc
        self._log_turn(ctx, response, streamed=True)
        return response

    def _decode_stream_body(self, body: bytes) -> CanonicalResponse:
        parser = SSEParser(self._diagnostics)
        events = parser.feed(body) + parser.close()
        if not events:
            if body.strip():
                # Some gateways ignore ``stream: true`` and answer with plain JSON.
                return self.adapter.decode(WireResponse(status=200, body=body))
            raise self.adapter.format_error("stream ended without any event")
        response = self.adapter.decode_stream(events)
        response.warnings.extend(f"sse decode error: {err.error}" for err in parser.decode_errors)
        return response

    def _turn_failed(
        self, exc: ProviderError, live: Optional[_LiveSink], ctx: LogContext
    ) -> TurnFailedError:
        normalized_log_event(
            self._logger,
            "engine.turn_failed",
            ctx,
            phase="finalize",
            error_code=exc.code.value,
            emitted=bool(live and live.bytes_streamed),
            level=logging.ERROR,
            status=exc.status,
        )
        fields = {
            "code": exc.code,
            "message": exc.message,
            "provider": exc.provider,
            "model": exc.model,
            "retryable": False,
            "raw": exc,
            "status": exc.status,
            "cause": exc,
        }
        if live is not None and live.bytes_streamed:
            return PartialContentError(
                **fields,
                partial_content=live.content(),
                bytes_streamed=live.bytes_streamed,
            )
        return NoContentError(**fields)

    def _log_turn(self, ctx: LogContext, response: CanonicalResponse, *, streamed: bool) -> None:
        ctx.response_id = response.response_id
        normalized_log_event(
            self._logger,
            "engine.turn",
            ctx,
            phase="finalize",
            emitted=bool(response.content or response.tool_calls),
            tokens=response.usage,
            streamed=streamed,
            finish_reason=response.finish_reason,
            tool_calls=len(response.tool_calls) or None,
            warnings=len(response.warnings) or None,
        )

    # ----- continuation -----
    def next_state(self, request: CanonicalRequest, response: CanonicalResponse) -> ContinuationState:
        return self.continuation.state_after_turn(self.vendor, request, response)

    def continue_with_tool_results(
        self, state: ContinuationState, tool_results: Iterable[ToolResultLike]
    ) -> CanonicalRequest:
        return self.continuation.continue_with_tool_results(state, tool_results)

    # ----- model listing -----
    def list_models(self) -> List[ModelInfo]:
        settings = self.settings()
        wire = self.adapter.models_request(settings)
        raw = self.transport_for(settings).exchange(wire, streaming=False)
        return self.adapter.decode_models(raw)


__all__ = ["LLMEngine", "ChunkSink", "EventSink"]
