"""OpenAI Responses adapter: request encoding, body decoding, stream folding."""
from __future__ import annotations

import json

import pytest

from llm_bridge.base.dto import VendorSettings
from llm_bridge.base.errors import ErrorCode, ProviderError, ResponseFormatError
from llm_bridge.base.models import ContentPart, Message, ToolCall, WireResponse
from llm_bridge.base.sse import parse_events
from llm_bridge.openai import OpenAIAdapter
from llm_bridge.tests.helpers import WEATHER_TOOL, sse_body, user_request

_SETTINGS = VendorSettings(api_key="sk-test", organization="org-1")


def test_encode_builds_responses_payload():
    request = user_request(
        temperature=1.7,
        max_tokens=64,
        tools=[WEATHER_TOOL],
        tool_choice={"name": "get_weather"},
    )
    request.messages.insert(0, Message(role="system", content="Answer briefly."))
    wire = OpenAIAdapter().encode(request, _SETTINGS)
    assert wire.url == "https://api.openai.com/v1/responses"
    assert wire.headers["Authorization"] == "Bearer sk-test"
    assert wire.headers["OpenAI-Organization"] == "org-1"
    body = wire.body
    assert body["instructions"] == "Answer briefly."
    assert body["temperature"] == 1.0
    assert body["max_output_tokens"] == 64
    assert body["input"] == [{"role": "user", "content": [{"type": "input_text", "text": "What is the weather in Paris?"}]}]
    assert body["tools"][0] == {
        "type": "function",
        "name": "get_weather",
        "description": "Look up the weather for a city",
        "parameters": WEATHER_TOOL.parameters,
    }
    assert body["tool_choice"] == {"type": "function", "name": "get_weather"}
    assert "previous_response_id" not in body


def test_encode_continuation_and_history_items():
    call = ToolCall(id="call_1", name="get_weather", arguments='{"city": "Paris"}')
    request = user_request(continuation_token="resp_1")
    request.messages.extend(
        [
            Message(role="assistant", content="", tool_calls=[call]),
            Message(role="tool", content="sunny", tool_call_id="call_1"),
            Message(
                role="user",
                content=[ContentPart(type="image", data="AAAA", mime_type="image/png"), ContentPart(type="file", file_id="file_9")],
            ),
        ]
    )
    body = OpenAIAdapter().build_body(request)
    assert body["previous_response_id"] == "resp_1"
    assert body["input"][1] == {"type": "function_call", "call_id": "call_1", "name": "get_weather", "arguments": '{"city": "Paris"}'}
    assert body["input"][2] == {"type": "function_call_output", "call_id": "call_1", "output": "sunny"}
    assert body["input"][3]["content"] == [
        {"type": "input_image", "image_url": "data:image/png;base64,AAAA"},
        {"type": "input_file", "file_id": "file_9"},
    ]


def test_decode_body_reads_text_calls_and_usage():
    body = {
        "object": "response",
        "id": "resp_2",
        "model": "gpt-test",
        "status": "incomplete",
        "incomplete_details": {"reason": "max_output_tokens"},
        "output": [
            {"type": "reasoning", "summary": []},
            {"type": "message", "content": [{"type": "output_text", "text": "Part"}]},
            {"type": "function_call", "call_id": "call_7", "name": "get_weather", "arguments": '{"city":"Rome"}'},
            {"type": "function_call", "call_id": "call_8", "name": "get_weather", "status": "in_progress"},
        ],
        "usage": {"input_tokens": 11, "output_tokens": 3},
    }
    response = OpenAIAdapter().decode(WireResponse(status=200, body=json.dumps(body).encode("utf-8")))
    assert response.content == "Part"
    assert [c.id for c in response.tool_calls] == ["call_7"]
    assert response.tool_calls[0].arguments_dict() == {"city": "Rome"}
    assert response.continuation_token == "resp_2"
    assert response.finish_reason == "incomplete"
    assert response.metadata == {"incomplete_reason": "max_output_tokens"}
    assert response.usage.prompt_tokens == 11


def test_decode_rejects_unknown_envelope_and_failed_response():
    adapter = OpenAIAdapter()
    with pytest.raises(ResponseFormatError):
        adapter.decode_body({"object": "chat.completion"})
    with pytest.raises(ProviderError) as info:
        adapter.decode_body(
            {"object": "response", "status": "failed", "error": {"code": "server_error", "message": "boom"}}
        )
    assert info.value.code is ErrorCode.SERVER_ERROR
    assert "boom" in info.value.message


def test_stream_without_deltas_takes_summary_text():
    events = parse_events(
        sse_body(
            {
                "type": "response.completed",
                "response": {
                    "id": "resp_3",
                    "status": "completed",
                    "output": [{"type": "message", "content": [{"type": "output_text", "text": "Summary"}]}],
                },
            },
            typed=True,
        )
    )
    response = OpenAIAdapter().decode_stream(events)
    assert response.content == "Summary"
    assert response.continuation_token == "resp_3"


def test_stream_failure_event_raises():
    events = parse_events(
        sse_body({"type": "response.failed", "response": {"error": {"code": "rate_limit_exceeded", "message": "slow"}}}, typed=True)
    )
    with pytest.raises(ProviderError) as info:
        OpenAIAdapter().decode_stream(events)
    assert info.value.code is ErrorCode.RATE_LIMIT
    assert info.value.retryable


def test_http_error_reads_vendor_message():
    err = OpenAIAdapter().http_error(429, b'{"error": {"message": "Rate limit reached"}}')
    assert err.code is ErrorCode.RATE_LIMIT
    assert err.retryable
    assert "Rate limit reached" in err.message
    assert OpenAIAdapter().http_error(500, b"<html>oops</html>").message.endswith("<html>oops</html>")
