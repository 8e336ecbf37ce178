"""VendorAdapter Protocol (single-class module).

The one interface every vendor implementation satisfies. Dispatch never looks
past this protocol, so adding a vendor means adding an implementation and a
factory entry.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Protocol, Union, runtime_checkable, Any

from ..continuation.strategy import ContinuationStrategy
from ..dto import VendorSettings
from ..models import CanonicalRequest, CanonicalResponse, ModelInfo, ToolCall, WireRequest, WireResponse
from ..sse import StreamEvent
from ..tools.strategy import ToolStrategy


@runtime_checkable
class VendorAdapter(Protocol):
    """Pure translation between the canonical model and one vendor's wire format."""

    vendor: str
    tool_strategy: ToolStrategy
    continuation_strategy: ContinuationStrategy

    def encode(self, request: CanonicalRequest, settings: VendorSettings) -> WireRequest:  # pragma: no cover - interface
        """Translate a canonical request into an HTTP request."""
        ...

    def decode(self, response: WireResponse) -> CanonicalResponse:  # pragma: no cover - interface
        """Translate a non-streaming vendor response."""
        ...

    def decode_stream(self, events: Iterable[StreamEvent]) -> CanonicalResponse:  # pragma: no cover - interface
        """Fold an ordered event sequence into a canonical response."""
        ...

    def extract_tool_calls(
        self, source: Union[WireResponse, Mapping[str, Any], Iterable[StreamEvent]]
    ) -> List[ToolCall]:  # pragma: no cover - interface
        """Return the completed tool calls carried by a body or an event sequence."""
        ...

    def models_request(self, settings: VendorSettings) -> WireRequest:  # pragma: no cover - interface
        """Build the model listing request."""
        ...

    def decode_models(self, response: WireResponse) -> List[ModelInfo]:  # pragma: no cover - interface
        """Translate the model listing response."""
        ...
