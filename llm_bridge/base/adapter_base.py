"""BaseVendorAdapter shared by every vendor implementation.

Purpose:
- Hold the behavior all adapters share so vendor modules only describe their
  wire format: request validation, credential checks, HTTP error mapping,
  JSON body loading, the stream fold loop and tool-call extraction.

External dependencies:
- None beyond the base layer. Adapters never perform I/O; they build
  :class:`WireRequest` objects and interpret :class:`WireResponse` objects.

Failure modes:
- ``ConfigurationError`` for a missing API key or an invalid request.
- ``ProviderError`` (with ``status``) for HTTP status >= 400.
- ``ResponseFormatError`` when the body is not JSON or the envelope is not
  recognized.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .constants import MISSING_API_KEY_ERROR, USER_AGENT
from .continuation.strategy import ContinuationStrategy
from .diagnostics import DiagnosticsSink, null_diagnostics
from .dto import VendorSettings
from .errors import (
    ConfigurationError,
    ErrorCode,
    ProviderError,
    ResponseFormatError,
    code_for_status,
)
from .errors_parts.classification import TRANSIENT_CODES
from .models import (
    CanonicalRequest,
    CanonicalResponse,
    ModelInfo,
    ToolCall,
    WireRequest,
    WireResponse,
)
from .sse import StreamEvent
from .streaming import StreamState
from .tools import ToolStrategy


def clamp(value: Optional[float], low: float, high: float) -> Optional[float]:
    """Clamp ``value`` into ``[low, high]``; ``None`` passes through."""
    if value is None:
        return None
    return max(low, min(high, float(value)))


def parse_arguments(arguments: Optional[str]) -> Dict[str, Any]:
    """Decode canonical JSON argument text into a mapping (``{}`` on failure)."""
    if not arguments:
        return {}
    try:
        value = json.loads(arguments)
    except ValueError:
        return {}
    return value if isinstance(value, dict) else {}


def error_message_from_body(body: Any) -> Optional[str]:
    """Return the vendor error message from a decoded error body.

    Recognizes ``{"error": {"message": ...}}``, ``{"error": "..."}`` and
    ``{"message": ...}``, plus a list wrapping one of those (Gemini).
    """
    if isinstance(body, list) and body:
        body = body[0]
    if not isinstance(body, Mapping):
        return None
    err = body.get("error")
    if isinstance(err, Mapping) and err.get("message"):
        return str(err["message"])
    if isinstance(err, str) and err:
        return err
    if body.get("message"):
        return str(body["message"])
    return None


class BaseVendorAdapter:
    """Common implementation of the :class:`VendorAdapter` protocol.

    Subclasses set the class attributes and implement ``endpoint``,
    ``build_headers``, ``build_body``, ``decode_body`` and ``apply_event``.
    """

    vendor: str = ""
    default_base_url: str = ""
    tool_strategy: ToolStrategy = ToolStrategy.DELTA_ACCUMULATION
    continuation_strategy: ContinuationStrategy = ContinuationStrategy.HISTORY_REBUILD
    models_path: str = "/models"

    def __init__(self, diagnostics: Optional[DiagnosticsSink] = None) -> None:
        self._diagnostics = diagnostics or null_diagnostics

    # ----- Abstract surface -----
    def endpoint(self, request: CanonicalRequest, settings: VendorSettings) -> str:  # pragma: no cover - abstract
        raise NotImplementedError

    def build_headers(self, settings: VendorSettings) -> Dict[str, str]:  # pragma: no cover - abstract
        raise NotImplementedError

    def build_body(self, request: CanonicalRequest) -> Dict[str, Any]:  # pragma: no cover - abstract
        raise NotImplementedError

    def decode_body(self, body: Any) -> CanonicalResponse:  # pragma: no cover - abstract
        raise NotImplementedError

    def apply_event(self, state: StreamState, event: StreamEvent) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def continuation_token_for(self, state: StreamState) -> Optional[str]:
        """Token a streamed turn hands to the continuation manager."""
        return None

    # ----- Encode -----
    def encode(self, request: CanonicalRequest, settings: VendorSettings) -> WireRequest:
        request.validate(self.vendor)
        self.require_api_key(settings, request.model)
        headers = {"Content-Type": "application/json", "User-Agent": USER_AGENT}
        if request.stream:
            headers["Accept"] = "text/event-stream"
        headers |= self.build_headers(settings)
        headers |= dict(settings.headers)
        return WireRequest(
            vendor=self.vendor,
            method="POST",
            url=self.endpoint(request, settings),
            headers=headers,
            body=self.build_body(request),
            stream=request.stream,
            model=request.model,
        )

    def require_api_key(self, settings: VendorSettings, model: Optional[str] = None) -> str:
        if not settings.api_key:
            raise ConfigurationError(
                code=ErrorCode.CONFIGURATION,
                message=f"{MISSING_API_KEY_ERROR}: no API key configured for {self.vendor}",
                provider=self.vendor,
                model=model,
            )
        return settings.api_key

    def base_url(self, settings: VendorSettings) -> str:
        return settings.base_url_or(self.default_base_url)

    # ----- Decode -----
    def decode(self, response: WireResponse) -> CanonicalResponse:
        self.raise_for_status(response)
        return self.decode_body(self.load_json(response))

    def raise_for_status(self, response: WireResponse) -> None:
        """Raise ``ProviderError`` for HTTP status >= 400."""
        if response.status < 400:
            return
        raise self.http_error(response.status, response.body)

    def http_error(self, status: int, body: bytes) -> ProviderError:
        message = None
        try:
            message = error_message_from_body(json.loads(body.decode("utf-8"))) if body else None
        except ValueError:
            message = None
        if message is None:
            text = body.decode("utf-8", errors="replace").strip() if body else ""
            message = text[:500] or "no error body"
        code = code_for_status(status)
        return ProviderError(
            code=code,
            message=f"{self.vendor} API error (HTTP {status}): {message}",
            provider=self.vendor,
            retryable=code in TRANSIENT_CODES,
            status=status,
        )

    def load_json(self, response: WireResponse) -> Any:
        try:
            return response.json()
        except (ValueError, UnicodeDecodeError) as exc:
            raise self.format_error(f"response body is not valid JSON: {exc}") from exc

    def format_error(self, message: str, model: Optional[str] = None) -> ResponseFormatError:
        return ResponseFormatError(
            code=ErrorCode.RESPONSE_FORMAT,
            message=message,
            provider=self.vendor,
            model=model,
        )

    def stream_error(self, payload: Any, default: str = "stream reported an error") -> ProviderError:
        """Build the error for an in-band streaming error event."""
        message = error_message_from_body(payload) or default
        err = payload.get("error") if isinstance(payload, Mapping) else None
        kind = str(err.get("type") or err.get("code") or "") if isinstance(err, Mapping) else ""
        code = ErrorCode.UNKNOWN
        if "overloaded" in kind or "unavailable" in kind:
            code = ErrorCode.UNAVAILABLE
        elif "rate" in kind:
            code = ErrorCode.RATE_LIMIT
        elif "server" in kind or "api_error" in kind:
            code = ErrorCode.SERVER_ERROR
        return ProviderError(
            code=code,
            message=f"{self.vendor} stream error: {message}",
            provider=self.vendor,
            retryable=code in TRANSIENT_CODES,
        )

    # ----- Streaming -----
    def new_stream_state(self) -> StreamState:
        return StreamState(self.vendor, self.tool_strategy, self._diagnostics)

    def decode_stream(self, events: Iterable[StreamEvent]) -> CanonicalResponse:
        state = self.new_stream_state()
        for event in events:
            if event.is_done:
                break
            state.events_seen += 1
            self.apply_event(state, event)
        return state.finish(continuation_token=self.continuation_token_for(state))

    # ----- Tool calls -----
    def extract_tool_calls(
        self, source: Union[WireResponse, Mapping[str, Any], Iterable[StreamEvent]]
    ) -> List[ToolCall]:
        if isinstance(source, WireResponse):
            return self.decode(source).tool_calls
        if isinstance(source, Mapping):
            return self.decode_body(source).tool_calls
        return self.decode_stream(source).tool_calls

    # ----- Model listing -----
    def models_request(self, settings: VendorSettings) -> WireRequest:
        self.require_api_key(settings)
        headers = self.build_headers(settings) | dict(settings.headers)
        return WireRequest(
            vendor=self.vendor,
            method="GET",
            url=f"{self.base_url(settings)}{self.models_path}",
            headers=headers,
        )

    def decode_models(self, response: WireResponse) -> List[ModelInfo]:
        """Decode an OpenAI-style ``{"data": [{"id": ...}]}`` listing."""
        self.raise_for_status(response)
        body = self.load_json(response)
        data = body.get("data") if isinstance(body, Mapping) else None
        if not isinstance(data, list):
            raise self.format_error("model listing has no 'data' array")
        models: List[ModelInfo] = []
        for item in data:
            if not isinstance(item, Mapping) or not item.get("id"):
                continue
            ctx = item.get("context_length")
            models.append(
                ModelInfo(
                    id=str(item["id"]),
                    name=str(item.get("name") or item.get("display_name") or item["id"]),
                    vendor=self.vendor,
                    context_length=int(ctx) if isinstance(ctx, int) else None,
                )
            )
        return models


__all__ = [
    "BaseVendorAdapter",
    "clamp",
    "parse_arguments",
    "error_message_from_body",
]
