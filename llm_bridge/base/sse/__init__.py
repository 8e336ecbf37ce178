"""Server-Sent-Events parsing."""

from .parser import SSEParser, iter_events, parse_events
from .stream_event import (
    DEFAULT_EVENT_TYPE,
    DONE_EVENT,
    DONE_EVENT_TYPE,
    DONE_SENTINEL,
    SSEDecodeError,
    StreamEvent,
)

__all__ = [
    "SSEParser",
    "parse_events",
    "iter_events",
    "StreamEvent",
    "SSEDecodeError",
    "DEFAULT_EVENT_TYPE",
    "DONE_EVENT",
    "DONE_EVENT_TYPE",
    "DONE_SENTINEL",
]
