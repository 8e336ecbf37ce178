"""llm_bridge package

Unified interface for invoking OpenAI, Anthropic, Gemini, Grok and OpenRouter
from one canonical request/response model, including streaming, tool calls
and multi-turn tool continuation.

Public API (re-exported):
    - Version: ``__version__``
    - Entry points: :func:`create`, :func:`request`, :func:`stream_request`,
      :func:`continue_with_tool_results`
    - Canonical model: ``CanonicalRequest``, ``CanonicalResponse``,
      ``Message``, ``ContentPart``, ``ToolSpec``, ``ToolCall``, ``Usage``,
      ``ToolResult``
    - Errors: ``ProviderError``, ``ErrorCode`` and the taxonomy subclasses

Example::

    import llm_bridge
    from llm_bridge import CanonicalRequest, Message

    req = CanonicalRequest(model="gpt-4o-mini", messages=[Message("user", "hi")])
    resp = llm_bridge.request(req, vendor="openai")
"""

from typing import Any, Iterable, Optional

from .base import (
    CancellationToken,
    CanonicalRequest,
    CanonicalResponse,
    ContentPart,
    ContinuationManager,
    ContinuationState,
    LLMEngine,
    Message,
    ToolCall,
    ToolResult,
    ToolSpec,
    Usage,
    VendorSettings,
)
from .base.engine import ChunkSink, EventSink
from .base.errors import (
    ConfigurationError,
    ErrorCode,
    MissingContinuationState,
    NoContentError,
    PartialContentError,
    ProviderError,
    ResponseFormatError,
    ToolExtractionWarning,
    TransportError,
    TurnFailedError,
)

__version__ = "0.1.0"


def create(vendor: str, **kwargs: Any) -> LLMEngine:
    """Create an :class:`LLMEngine` for ``vendor`` (kwargs go to the engine)."""
    return LLMEngine(vendor, **kwargs)


def request(req: CanonicalRequest, *, vendor: str, **kwargs: Any) -> CanonicalResponse:
    """Run one non-streaming turn against ``vendor``."""
    return create(vendor, **kwargs).request(req)


def stream_request(
    req: CanonicalRequest,
    chunk_sink: Optional[ChunkSink] = None,
    *,
    vendor: str,
    cancel: Optional[CancellationToken] = None,
    event_sink: Optional[EventSink] = None,
    **kwargs: Any,
) -> CanonicalResponse:
    """Run one streaming turn; ``chunk_sink`` receives the raw vendor bytes."""
    return create(vendor, **kwargs).stream_request(req, chunk_sink, cancel=cancel, event_sink=event_sink)


def continue_with_tool_results(state: ContinuationState, tool_results: Iterable[Any]) -> CanonicalRequest:
    """Build the next request of a tool-calling conversation."""
    return ContinuationManager().continue_with_tool_results(state, tool_results)


__all__ = [
    "__version__",
    "create",
    "request",
    "stream_request",
    "continue_with_tool_results",
    "LLMEngine",
    "CanonicalRequest",
    "CanonicalResponse",
    "ContentPart",
    "Message",
    "ToolSpec",
    "ToolCall",
    "ToolResult",
    "Usage",
    "VendorSettings",
    "ContinuationState",
    "CancellationToken",
    "ProviderError",
    "ErrorCode",
    "ConfigurationError",
    "TransportError",
    "ResponseFormatError",
    "MissingContinuationState",
    "TurnFailedError",
    "NoContentError",
    "PartialContentError",
    "ToolExtractionWarning",
]
