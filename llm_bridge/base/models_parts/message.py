"""
Message DTO used across vendors.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Content may be either plain text or a list of `ContentPart` objects.
Assistant messages that requested tools keep those calls so a full history can
be replayed, and tool-role messages reference the call they answer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from .content_part import ContentPart
from .tool_call import ToolCall


# Message roles used across vendors.
Role = Literal["system", "user", "assistant", "tool"]

ROLES = ("system", "user", "assistant", "tool")


@dataclass
class Message:
    """A chat message used by the canonical request.

    Attributes:
        role: The role of the message author.
        content: Either a plain text string or a list of `ContentPart` items.
        tool_call_id: For ``"tool"`` messages, the id of the answered call.
        tool_calls: For ``"assistant"`` messages, the calls the model made.
        name: For ``"tool"`` messages, the tool name (some vendors key results
            by function name rather than id).
    """

    role: Role
    content: Union[str, List[ContentPart]]
    tool_call_id: Optional[str] = None
    tool_calls: List[ToolCall] = field(default_factory=list)
    name: Optional[str] = None

    def is_structured(self) -> bool:
        """Return True if the message content is a structured list of parts."""
        return isinstance(self.content, list)

    def is_empty(self) -> bool:
        """True when the message carries neither content nor tool calls."""
        if self.tool_calls:
            return False
        if isinstance(self.content, str):
            return not self.content.strip()
        return not self.content

    def text_or_joined(self) -> str:
        """Return a flattened string representation of the message content.

        If the content is already a string, it is returned as-is. For
        structured content, text values are concatenated with newlines and
        non-text parts are represented by bracketed type tokens.
        """
        if isinstance(self.content, str):
            return self.content
        parts: List[str] = []
        for p in self.content:
            if p.text:
                parts.append(p.text)
            else:
                parts.append(f"[{p.type}]")
        return "\n".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "role": self.role,
            "content": (
                self.content if isinstance(self.content, str)
                else [p.to_dict() for p in self.content]
            ),
        }
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            data["tool_calls"] = [c.to_dict() for c in self.tool_calls]
        if self.name is not None:
            data["name"] = self.name
        return data


__all__ = [
    "Message",
    "Role",
    "ROLES",
]
