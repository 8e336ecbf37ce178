"""Shared builders for the engine test suite.

Offline only: HTTP traffic goes through ``httpx.MockTransport`` and SSE
bodies are assembled byte-for-byte here.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Iterable, List, Optional

import httpx

from llm_bridge.base.models import CanonicalRequest, Message, ToolSpec

WEATHER_TOOL = ToolSpec(
    name="get_weather",
    description="Look up the weather for a city",
    parameters={"type": "object", "properties": {"city": {"type": "string"}}, "required": ["city"]},
)


def sse_block(payload: Any, event: Optional[str] = None, event_id: Optional[str] = None) -> bytes:
    """Encode one SSE block (``payload`` may be a mapping or raw text)."""
    data = payload if isinstance(payload, str) else json.dumps(payload)
    lines: List[str] = []
    if event:
        lines.append(f"event: {event}")
    if event_id:
        lines.append(f"id: {event_id}")
    lines.extend(f"data: {line}" for line in data.split("\n"))
    return ("\n".join(lines) + "\n\n").encode("utf-8")


def sse_body(*payloads: Any, done: bool = True, typed: bool = False) -> bytes:
    """Join SSE blocks; ``typed`` copies each payload's ``type`` into ``event:``."""
    out = b"".join(
        sse_block(p, event=p.get("type") if typed and isinstance(p, dict) else None) for p in payloads
    )
    if done:
        out += b"data: [DONE]\n\n"
    return out


def chunked(data: bytes, size: int) -> List[bytes]:
    return [data[i : i + size] for i in range(0, len(data), size)]


def user_request(text: str = "What is the weather in Paris?", **kwargs: Any) -> CanonicalRequest:
    kwargs.setdefault("model", "test-model")
    return CanonicalRequest(messages=[Message(role="user", content=text)], **kwargs)


class FakeServer:
    """Scripted ``httpx.MockTransport`` handler.

    Each entry in ``responses`` is either an ``httpx.Response``, a callable
    returning one, or an exception instance to raise. The last entry repeats
    once the script is exhausted. Every request is recorded.
    """

    def __init__(self, responses: Iterable[Any]) -> None:
        self._responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self._responses)) - 1
        item = self._responses[index]
        if isinstance(item, Exception):
            raise item
        if callable(item) and not isinstance(item, httpx.Response):
            return item(request)
        return item

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))

    def json_bodies(self) -> List[Any]:
        return [json.loads(r.content.decode("utf-8")) if r.content else None for r in self.requests]


def streamed(chunks: Iterable[bytes], status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Build a handler entry answering with ``chunks`` as separate body chunks."""
    materialized = list(chunks)

    def _respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status,
            headers={"content-type": "text/event-stream"},
            content=iter(materialized),
        )

    return _respond


def broken_stream(chunks: Iterable[bytes], error: Exception) -> Callable[[httpx.Request], httpx.Response]:
    """Handler entry that delivers ``chunks`` and then fails with ``error``."""
    materialized = list(chunks)

    def _gen():
        yield from materialized
        raise error

    def _respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"content-type": "text/event-stream"}, content=_gen())

    return _respond
