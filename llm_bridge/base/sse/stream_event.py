"""
Parsed Server-Sent-Events record.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

DEFAULT_EVENT_TYPE = "message"
DONE_EVENT_TYPE = "done"
DONE_SENTINEL = "[DONE]"


@dataclass(frozen=True)
class StreamEvent:
    """One complete SSE event.

    Attributes:
        type: Value of the ``event:`` field (``"message"`` when absent), or
            ``"done"`` for the ``[DONE]`` sentinel.
        data: Concatenated ``data:`` payload text.
        payload: ``data`` decoded as JSON (``None`` for the sentinel).
        id: Value of the ``id:`` field, when present.
    """

    type: str
    data: str
    payload: Any = field(default=None, compare=True)
    id: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return self.type == DONE_EVENT_TYPE

    def get(self, key: str, default: Any = None) -> Any:
        """Dictionary-style access into a mapping payload."""
        if isinstance(self.payload, dict):
            return self.payload.get(key, default)
        return default


@dataclass(frozen=True)
class SSEDecodeError:
    """A complete event whose data was not valid JSON."""

    type: str
    data: str
    error: str


DONE_EVENT = StreamEvent(type=DONE_EVENT_TYPE, data=DONE_SENTINEL)


__all__ = [
    "StreamEvent",
    "SSEDecodeError",
    "DEFAULT_EVENT_TYPE",
    "DONE_EVENT_TYPE",
    "DONE_SENTINEL",
    "DONE_EVENT",
]
