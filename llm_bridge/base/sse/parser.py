"""Incremental Server-Sent-Events parser.

``SSEParser`` consumes a response body in arbitrarily sized byte chunks and
yields complete :class:`StreamEvent` records. It keeps the unterminated tail
between calls, so the sequence of events does not depend on where the
network split the bytes:

* blocks end at a blank line; ``\\r\\n`` is normalized even when the ``\\r``
  and the ``\\n`` arrive in different chunks;
* bytes are decoded per complete block, so split multi-byte UTF-8 sequences
  are reassembled before decoding;
* ``event:`` sets the type, ``data:`` lines are joined with ``\\n``, ``id:``
  is kept, ``:`` comment lines are ignored;
* invalid JSON is recorded in ``decode_errors`` and reported to the
  diagnostics sink, then skipped;
* a ``[DONE]`` payload emits the done event and ends parsing.

A parser instance belongs to exactly one HTTP response.
"""
from __future__ import annotations

import json
from typing import Iterable, List, Optional

from ..diagnostics import DiagnosticsSink, null_diagnostics
from .stream_event import (
    DEFAULT_EVENT_TYPE,
    DONE_EVENT,
    DONE_SENTINEL,
    SSEDecodeError,
    StreamEvent,
)

_BLOCK_END = b"\n\n"


class SSEParser:
    """Stateful, single-use SSE parser.

    Parameters:
        diagnostics: Sink notified with ``sse.decode_error`` for every event
            whose data is not valid JSON.
    """

    def __init__(self, diagnostics: Optional[DiagnosticsSink] = None) -> None:
        self._buffer = bytearray()
        self._diagnostics = diagnostics or null_diagnostics
        self.decode_errors: List[SSEDecodeError] = []
        self.finished = False

    def feed(self, chunk: bytes) -> List[StreamEvent]:
        """Append ``chunk`` and return the events it completed."""
        if self.finished or not chunk:
            return []
        self._buffer.extend(chunk)
        self._normalize_newlines()
        events: List[StreamEvent] = []
        while not self.finished:
            end = self._buffer.find(_BLOCK_END)
            if end < 0:
                break
            block = bytes(self._buffer[:end])
            del self._buffer[: end + len(_BLOCK_END)]
            event = self._parse_block(block)
            if event is not None:
                events.append(event)
        return events

    def close(self) -> List[StreamEvent]:
        """Flush a final block that was not followed by a blank line."""
        if self.finished:
            return []
        tail = bytes(self._buffer).rstrip(b"\r\n")
        self._buffer.clear()
        if not tail:
            return []
        event = self._parse_block(tail.replace(b"\r\n", b"\n"))
        return [event] if event is not None else []

    def _normalize_newlines(self) -> None:
        # A trailing lone "\r" may be the first half of a "\r\n" pair; it is
        # left in place until the next chunk arrives.
        if b"\r\n" in self._buffer:
            self._buffer[:] = self._buffer.replace(b"\r\n", b"\n")

    def _parse_block(self, block: bytes) -> Optional[StreamEvent]:
        event_type = DEFAULT_EVENT_TYPE
        event_id: Optional[str] = None
        data_lines: List[str] = []
        for line in block.decode("utf-8", errors="replace").split("\n"):
            if not line or line.startswith(":"):
                continue
            name, _, value = line.partition(":")
            if value.startswith(" "):
                value = value[1:]
            if name == "event":
                event_type = value.strip() or DEFAULT_EVENT_TYPE
            elif name == "data":
                data_lines.append(value)
            elif name == "id":
                event_id = value
        if not data_lines:
            return None
        data = "\n".join(data_lines)
        if data.strip() == DONE_SENTINEL:
            self.finished = True
            self._buffer.clear()
            return DONE_EVENT
        try:
            payload = json.loads(data)
        except ValueError as exc:
            error = SSEDecodeError(type=event_type, data=data, error=str(exc))
            self.decode_errors.append(error)
            self._diagnostics(
                "sse.decode_error",
                {"event_type": event_type, "error": str(exc), "data_preview": data[:200]},
            )
            return None
        return StreamEvent(type=event_type, data=data, payload=payload, id=event_id)


def parse_events(
    buffer: bytes,
    diagnostics: Optional[DiagnosticsSink] = None,
) -> List[StreamEvent]:
    """Parse a complete response body in one pass."""
    parser = SSEParser(diagnostics)
    events = parser.feed(buffer)
    events.extend(parser.close())
    return events


def iter_events(
    chunks: Iterable[bytes],
    diagnostics: Optional[DiagnosticsSink] = None,
) -> Iterable[StreamEvent]:
    """Lazily parse an iterable of byte chunks, stopping after ``[DONE]``."""
    parser = SSEParser(diagnostics)
    for chunk in chunks:
        yield from parser.feed(chunk)
        if parser.finished:
            return
    yield from parser.close()


__all__ = ["SSEParser", "parse_events", "iter_events"]
