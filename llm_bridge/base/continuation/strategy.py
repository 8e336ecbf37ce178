"""Continuation strategies."""
from __future__ import annotations

from enum import Enum


class ContinuationStrategy(str, Enum):
    """How a vendor resumes a conversation after tool execution.

    ``STATEFUL_ID``: the vendor keeps context server-side; the next request
    sends only the tool results plus the previous response id.
    ``HISTORY_REBUILD``: no server-side state; the full message history is
    resent with the tool results appended.
    """

    STATEFUL_ID = "stateful_id"
    HISTORY_REBUILD = "history_rebuild"


__all__ = ["ContinuationStrategy"]
