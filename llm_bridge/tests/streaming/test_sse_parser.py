"""Incremental SSE parsing independent of chunk boundaries."""
from __future__ import annotations

import pytest

from llm_bridge.base.sse import DONE_EVENT, SSEParser, iter_events, parse_events
from llm_bridge.tests.helpers import chunked, sse_block, sse_body

_BODY = (
    b": keep-alive\n\n"
    + sse_block({"type": "a", "text": "héllo"}, event="delta", event_id="1")
    + sse_block({"type": "b", "n": 2})
    + b"data: [DONE]\n\n"
    + sse_block({"ignored": True})
)


def _feed_all(chunks):
    parser = SSEParser()
    events = []
    for chunk in chunks:
        events.extend(parser.feed(chunk))
    events.extend(parser.close())
    return events


@pytest.mark.parametrize("size", [1, 2, 3, 7, 64, len(_BODY)])
def test_events_do_not_depend_on_chunk_size(size):
    assert _feed_all(chunked(_BODY, size)) == parse_events(_BODY)


def test_fields_are_decoded():
    events = parse_events(_BODY)
    assert [e.type for e in events] == ["delta", "message", "done"]
    first = events[0]
    assert first.id == "1"
    assert first.payload == {"type": "a", "text": "héllo"}
    assert first.get("text") == "héllo"
    assert events[-1] == DONE_EVENT and events[-1].is_done


def test_crlf_split_between_chunks():
    body = b'data: {"x": 1}\r\n\r\ndata: {"x": 2}\r\n\r\n'
    split = body.index(b"\r") + 1
    events = _feed_all([body[:split], body[split:]])
    assert [e.payload for e in events] == [{"x": 1}, {"x": 2}]


def test_multi_line_data_is_joined():
    events = parse_events(b'data: {"a":\ndata:  1}\n\n')
    assert events[0].data == '{"a":\n 1}'
    assert events[0].payload == {"a": 1}


def test_malformed_json_is_reported_and_skipped(diagnostics):
    parser = SSEParser(diagnostics)
    events = parser.feed(b"data: {not json\n\n" + sse_block({"ok": 1}))
    assert [e.payload for e in events] == [{"ok": 1}]
    assert len(parser.decode_errors) == 1
    assert parser.decode_errors[0].data == "{not json"
    assert diagnostics.events() == ["sse.decode_error"]


def test_close_flushes_unterminated_block():
    parser = SSEParser()
    assert parser.feed(b'event: tail\ndata: {"last": true}') == []
    events = parser.close()
    assert events[0].type == "tail"
    assert events[0].payload == {"last": True}
    assert parser.close() == []


def test_done_stops_parsing():
    parser = SSEParser()
    events = parser.feed(b"data: [DONE]\n\n")
    assert events == [DONE_EVENT]
    assert parser.finished
    assert parser.feed(sse_block({"late": 1})) == []
    assert parser.close() == []


def test_block_without_data_is_ignored():
    assert parse_events(b"event: ping\n\nid: 7\n\n") == []


def test_iter_events_stops_after_done():
    body = sse_body({"n": 1}, {"n": 2}) + sse_block({"n": 3})
    payloads = [e.payload for e in iter_events(chunked(body, 5))]
    assert payloads == [{"n": 1}, {"n": 2}, None]
