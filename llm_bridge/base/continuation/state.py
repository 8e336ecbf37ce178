"""Immutable conversation state carried between tool-calling turns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..models import Message, ToolCall, ToolChoice, ToolSpec
from .strategy import ContinuationStrategy


@dataclass(frozen=True)
class ContinuationState:
    """Everything needed to build the next request of a conversation.

    The caller owns the value between turns; the engine derives a new state
    each turn and never stores one.

    Attributes:
        vendor: Vendor the conversation runs against.
        strategy: How the next turn resumes the conversation.
        model: Model of the previous turn.
        token: Vendor response id (stateful vendors only).
        history: Messages to replay (history-rebuild vendors only); ends with
            the assistant turn that requested the tools.
        tools: Tool declarations carried into the next turn.
        tool_choice: Tool choice carried into the next turn.
        temperature: Sampling temperature carried into the next turn.
        max_tokens: Token cap carried into the next turn.
        stream: Whether the next turn streams.
        pending_tool_calls: Calls the model requested in the previous turn.
    """

    vendor: str
    strategy: ContinuationStrategy
    model: str
    token: Optional[str] = None
    history: Tuple[Message, ...] = ()
    tools: Tuple[ToolSpec, ...] = ()
    tool_choice: Optional[ToolChoice] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    stream: bool = False
    pending_tool_calls: Tuple[ToolCall, ...] = ()

    def can_continue(self) -> bool:
        """True when tools are pending and the strategy has what it needs."""
        if not self.pending_tool_calls:
            return False
        if self.strategy is ContinuationStrategy.STATEFUL_ID:
            return bool(self.token)
        return True

    def pending_names(self) -> Dict[str, str]:
        return {call.id: call.name for call in self.pending_tool_calls}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vendor": self.vendor,
            "strategy": self.strategy.value,
            "model": self.model,
            "token": self.token,
            "history": [m.to_dict() for m in self.history],
            "tools": [t.to_dict() for t in self.tools],
            "tool_choice": self.tool_choice,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "stream": self.stream,
            "pending_tool_calls": [c.to_dict() for c in self.pending_tool_calls],
        }


__all__ = ["ContinuationState"]
