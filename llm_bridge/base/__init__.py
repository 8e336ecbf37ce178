"""
Engine Base Package

Exports the vendor-agnostic contracts, DTOs, the adapter factory and the
engine pieces used by the vendor packages and by callers:

- Models (DTOs): canonical request/response, messages, tool calls, usage
- Interfaces: ``VendorAdapter`` and ``SettingsProvider`` protocols
- SSE parsing, tool-call extraction, transport and continuation
- Factory: lazy creation of vendor adapters by canonical name
"""

from .cancellation import CancellationToken, CancelledError
from .continuation import ContinuationManager, ContinuationState, ContinuationStrategy, is_terminal
from .diagnostics import DiagnosticsSink, RecordingDiagnostics, logger_diagnostics, null_diagnostics
from .dto import ToolResult, VendorSettings
from .engine import LLMEngine
from .factory import AdapterFactory, UnknownVendorError
from .interfaces import SettingsProvider, VendorAdapter
from .models import (
    CanonicalRequest,
    CanonicalResponse,
    ContentPart,
    ContentPartType,
    Message,
    ModelInfo,
    Role,
    ToolCall,
    ToolChoice,
    ToolSpec,
    Usage,
    WireRequest,
    WireResponse,
)
from .settings import ConfigSettingsProvider, StaticSettingsProvider
from .sse import SSEParser, StreamEvent, parse_events
from .timeouts import TimeoutConfig, get_timeout_config
from .tools import CompletedItemCollector, ToolCallAccumulator, ToolStrategy
from .transport import HttpTransport

__all__ = [
    # Models
    "Role",
    "ContentPartType",
    "ContentPart",
    "Message",
    "ToolCall",
    "ToolSpec",
    "ToolChoice",
    "Usage",
    "CanonicalRequest",
    "CanonicalResponse",
    "WireRequest",
    "WireResponse",
    "ModelInfo",
    "ToolResult",
    "VendorSettings",
    # Interfaces
    "VendorAdapter",
    "SettingsProvider",
    # Engine pieces
    "SSEParser",
    "StreamEvent",
    "parse_events",
    "ToolCallAccumulator",
    "CompletedItemCollector",
    "ToolStrategy",
    "HttpTransport",
    "ContinuationManager",
    "ContinuationState",
    "ContinuationStrategy",
    "is_terminal",
    "LLMEngine",
    # Settings / factory
    "ConfigSettingsProvider",
    "StaticSettingsProvider",
    "AdapterFactory",
    "UnknownVendorError",
    # Ambient
    "DiagnosticsSink",
    "RecordingDiagnostics",
    "logger_diagnostics",
    "null_diagnostics",
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
]
