"""HttpTransport behavior against scripted httpx.MockTransport servers."""
from __future__ import annotations

import httpx
import pytest

from llm_bridge.base.cancellation import CancellationToken, CancelledError
from llm_bridge.base.errors import ErrorCode, ProviderError, TransportError
from llm_bridge.base.models import WireRequest
from llm_bridge.base.resilience.retry import RetryConfig
from llm_bridge.base.transport import HttpTransport
from llm_bridge.tests.helpers import FakeServer, broken_stream, streamed


def _request(stream: bool = False) -> WireRequest:
    return WireRequest(
        vendor="openai",
        method="POST",
        url="https://api.test/v1/responses",
        headers={"Authorization": "Bearer sk-test"},
        body={"model": "m", "stream": stream},
        stream=stream,
        model="m",
    )


def test_blocking_send_returns_body():
    server = FakeServer([httpx.Response(200, json={"ok": True})])
    transport = HttpTransport(client=server.client())
    response = transport.exchange(_request(), streaming=False)
    assert response.status == 200
    assert response.json() == {"ok": True}
    assert server.json_bodies() == [{"model": "m", "stream": False}]
    assert server.requests[0].headers["authorization"] == "Bearer sk-test"


def test_blocking_send_never_retries(no_sleep):
    server = FakeServer([httpx.Response(503, json={"error": {"message": "busy"}})])
    transport = HttpTransport(client=server.client())
    with pytest.raises(ProviderError) as info:
        transport.send(_request(), streaming=False)
    assert info.value.code is ErrorCode.UNAVAILABLE
    assert info.value.status == 503
    assert "busy" in info.value.message
    assert len(server.requests) == 1
    assert no_sleep == []


def test_streaming_client_error_is_not_retried():
    server = FakeServer([httpx.Response(400, json={"error": {"message": "bad field"}})])
    transport = HttpTransport(client=server.client())
    with pytest.raises(ProviderError) as info:
        transport.send(_request(True), streaming=True)
    assert info.value.code is ErrorCode.VALIDATION
    assert info.value.model == "m"
    assert len(server.requests) == 1


def test_streaming_unavailable_exhausts_attempts(no_sleep):
    server = FakeServer([httpx.Response(503, text="upstream down")])
    transport = HttpTransport(client=server.client())
    with pytest.raises(ProviderError) as info:
        transport.send(_request(True), streaming=True)
    assert info.value.code is ErrorCode.UNAVAILABLE
    assert len(server.requests) == 3
    assert no_sleep == [1.0, 2.0]


def test_streaming_recovers_after_rate_limit(no_sleep):
    server = FakeServer(
        [
            httpx.Response(429, json={"error": {"message": "slow down"}}),
            streamed([b"data: one\n\n", b"data: two\n\n"]),
        ]
    )
    received = []
    attempts = []
    transport = HttpTransport(client=server.client())
    body = transport.send(_request(True), streaming=True, sink=received.append, on_attempt=attempts.append)
    assert body == b"data: one\n\ndata: two\n\n"
    assert received == [b"data: one\n\n", b"data: two\n\n"]
    assert attempts == [0, 1]
    assert no_sleep == [1.0]


def test_mid_stream_disconnect_becomes_transport_error(no_sleep):
    server = FakeServer([broken_stream([b"data: partial\n\n"], httpx.ReadError("connection reset"))])
    received = []
    transport = HttpTransport(RetryConfig(max_attempts=2), client=server.client())
    with pytest.raises(TransportError) as info:
        transport.send(_request(True), streaming=True, sink=received.append)
    assert info.value.code is ErrorCode.TRANSIENT
    assert info.value.retryable
    assert len(server.requests) == 2
    assert received == [b"data: partial\n\n", b"data: partial\n\n"]
    assert no_sleep == [1.0]


def test_timeout_maps_to_timeout_code():
    server = FakeServer([httpx.ReadTimeout("read timed out")])
    transport = HttpTransport(client=server.client())
    with pytest.raises(TransportError) as info:
        transport.send(_request(), streaming=False)
    assert info.value.code is ErrorCode.TIMEOUT
    assert len(server.requests) == 1


def test_custom_error_mapper_is_used():
    def _mapper(status: int, body: bytes) -> ProviderError:
        return ProviderError(code=ErrorCode.AUTH, message=f"mapped {status}", provider="openai", status=status)

    server = FakeServer([httpx.Response(401, text="nope")])
    transport = HttpTransport(client=server.client(), http_error=_mapper)
    with pytest.raises(ProviderError, match="mapped 401"):
        transport.send(_request(), streaming=False)


def test_cancel_before_start_sends_nothing():
    server = FakeServer([streamed([b"data: x\n\n"])])
    token = CancellationToken()
    token.cancel("user stop")
    with pytest.raises(CancelledError, match="user stop"):
        HttpTransport(client=server.client()).send(_request(True), streaming=True, cancel=token)
    assert server.requests == []


def test_cancel_during_stream_stops_delivery(no_sleep):
    server = FakeServer([streamed([b"data: 1\n\n", b"data: 2\n\n", b"data: 3\n\n"])])
    token = CancellationToken()
    received = []

    def _sink(chunk: bytes) -> None:
        received.append(chunk)
        token.cancel("enough")

    with pytest.raises(CancelledError):
        HttpTransport(client=server.client()).send(_request(True), streaming=True, sink=_sink, cancel=token)
    assert received == [b"data: 1\n\n"]
    assert len(server.requests) == 1
    assert no_sleep == []
