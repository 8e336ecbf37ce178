"""
CanonicalResponse DTO representing normalized vendor responses.

``raw`` carries the decoded vendor body for debugging but is excluded from
default serialization so large payloads are not logged unintentionally.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .tool_call import ToolCall
from .usage import Usage


@dataclass
class CanonicalResponse:
    """Vendor-agnostic result of one conversation turn.

    Attributes:
        content: Accumulated assistant text.
        usage: Token accounting.
        model: Model name reported by the vendor.
        finish_reason: Vendor-reported finish reason, passed through.
        tool_calls: Tool calls requested by the model, in order.
        continuation_token: Opaque response id for stateful vendors.
        vendor: Vendor key that produced the response.
        response_id: Vendor response identifier, when reported.
        warnings: Non-fatal diagnostics raised while decoding.
        metadata: Vendor extras (safety ratings, citations, ...).
        raw: Decoded vendor body for diagnostics only.
    """

    content: str = ""
    usage: Usage = field(default_factory=Usage)
    model: str = ""
    finish_reason: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)
    continuation_token: Optional[str] = None
    vendor: str = ""
    response_id: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    raw: Optional[Any] = field(default=None, repr=False)

    def needs_continuation(self) -> bool:
        """True when the caller must execute tools and continue the turn."""
        return bool(self.tool_calls)

    def is_terminal(self) -> bool:
        """True when the tool-calling loop ends with this turn, whatever the finish reason."""
        return not self.needs_continuation()

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary excluding the raw vendor body."""
        return {
            "content": self.content,
            "usage": self.usage.to_dict(),
            "model": self.model,
            "finish_reason": self.finish_reason,
            "tool_calls": [c.to_dict() for c in self.tool_calls] or None,
            "continuation_token": self.continuation_token,
            "vendor": self.vendor,
            "response_id": self.response_id,
            "warnings": list(self.warnings),
            "metadata": dict(self.metadata),
        }


__all__ = [
    "CanonicalResponse",
]
