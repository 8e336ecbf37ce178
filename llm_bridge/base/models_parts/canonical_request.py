"""
CanonicalRequest DTO for vendor-agnostic chat invocations.

Adapters map this normalized request shape to each vendor's wire format. The
request carries model selection, messages, sampling parameters, tool
declarations and, for stateful continuation, the vendor's opaque token.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import ConfigurationError, ErrorCode
from .message import ROLES, Message
from .tool_spec import ToolChoice, ToolSpec, specific_tool_name

_TOOL_CHOICES = ("auto", "none", "required")


@dataclass
class CanonicalRequest:
    """Normalized request sent to vendor adapters.

    Attributes:
        model: Target model identifier.
        messages: Ordered, non-empty list of `Message` instances.
        temperature: Sampling temperature in ``[0, 2]``; adapters clamp to the
            vendor's own range.
        max_tokens: Completion token cap (``>= 1``); adapters rename the field.
        tools: Optional tool declarations.
        tool_choice: ``"auto"``, ``"none"``, ``"required"`` or ``{"name": ...}``.
        stream: Whether the caller wants a streamed response.
        continuation_token: Opaque response id used by stateful continuation.
    """

    model: str
    messages: List[Message]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    tools: List[ToolSpec] = field(default_factory=list)
    tool_choice: Optional[ToolChoice] = None
    stream: bool = False
    continuation_token: Optional[str] = None

    def validate(self, provider: str = "unknown") -> "CanonicalRequest":
        """Check the request invariants and return ``self``.

        Raises:
            ConfigurationError: when messages are empty, a message lacks role
                or content, or a sampling parameter is out of range.
        """
        problem = self._first_problem()
        if problem:
            raise ConfigurationError(
                code=ErrorCode.VALIDATION,
                message=problem,
                provider=provider,
                model=self.model or None,
            )
        return self

    def _first_problem(self) -> Optional[str]:
        if not self.model:
            return "model is required"
        if not self.messages:
            return "messages must not be empty"
        for idx, m in enumerate(self.messages):
            if m.role not in ROLES:
                return f"messages[{idx}] has unknown role {m.role!r}"
            if m.content is None:
                return f"messages[{idx}] has no content"
            if m.role == "tool" and not m.tool_call_id:
                return f"messages[{idx}] is a tool result without tool_call_id"
        if self.temperature is not None and not 0.0 <= float(self.temperature) <= 2.0:
            return "temperature must be within [0, 2]"
        if self.max_tokens is not None and int(self.max_tokens) < 1:
            return "max_tokens must be >= 1"
        if self.tool_choice is not None:
            if isinstance(self.tool_choice, str):
                if self.tool_choice not in _TOOL_CHOICES:
                    return f"unknown tool_choice {self.tool_choice!r}"
            elif specific_tool_name(self.tool_choice) is None:
                return "tool_choice mapping must name a tool"
        return None

    def system_text(self) -> Optional[str]:
        """Join all system messages, or ``None`` when there are none."""
        texts = [m.text_or_joined() for m in self.messages if m.role == "system"]
        return "\n\n".join(t for t in texts if t) or None

    def non_system_messages(self) -> List[Message]:
        return [m for m in self.messages if m.role != "system"]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "tools": [t.to_dict() for t in self.tools],
            "tool_choice": self.tool_choice if isinstance(self.tool_choice, (str, type(None))) else dict(self.tool_choice),
            "stream": self.stream,
            "continuation_token": self.continuation_token,
        }


__all__ = [
    "CanonicalRequest",
]
