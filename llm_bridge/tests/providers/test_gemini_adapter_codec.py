"""Gemini generateContent adapter."""
from __future__ import annotations

import pytest

from llm_bridge.base.dto import VendorSettings
from llm_bridge.base.errors import ConfigurationError, ErrorCode, ProviderError, ResponseFormatError
from llm_bridge.base.models import ContentPart, Message, ToolCall
from llm_bridge.base.sse import parse_events
from llm_bridge.gemini import GeminiAdapter
from llm_bridge.tests.helpers import WEATHER_TOOL, sse_body, user_request


def test_endpoints_and_key_header():
    adapter = GeminiAdapter()
    settings = VendorSettings(api_key="g-key")
    blocking = adapter.encode(user_request(model="gemini-test"), settings)
    streaming = adapter.encode(user_request(model="models/gemini-test", stream=True), settings)
    base = "https://generativelanguage.googleapis.com/v1beta/models/gemini-test"
    assert blocking.url == f"{base}:generateContent"
    assert streaming.url == f"{base}:streamGenerateContent?alt=sse"
    assert blocking.headers["x-goog-api-key"] == "g-key"
    assert "g-key" not in streaming.url


def test_body_shapes():
    request = user_request(temperature=0.4, max_tokens=100, tools=[WEATHER_TOOL], tool_choice={"name": "get_weather"})
    request.messages.insert(0, Message(role="system", content="Short answers."))
    body = GeminiAdapter().build_body(request)
    assert body["systemInstruction"] == {"parts": [{"text": "Short answers."}]}
    assert body["generationConfig"] == {"temperature": 0.4, "maxOutputTokens": 100}
    assert body["tools"][0]["functionDeclarations"][0]["name"] == "get_weather"
    assert body["toolConfig"] == {"functionCallingConfig": {"mode": "ANY", "allowedFunctionNames": ["get_weather"]}}
    assert body["contents"] == [{"role": "user", "parts": [{"text": "What is the weather in Paris?"}]}]


def test_function_responses_recover_names_from_history():
    calls = [ToolCall(id="c1", name="get_weather", arguments='{"city": "Paris"}'), ToolCall(id="c2", name="get_time")]
    request = user_request()
    request.messages.extend(
        [
            Message(role="assistant", content="", tool_calls=calls),
            Message(role="tool", content='{"temp": 21}', tool_call_id="c1"),
            Message(role="tool", content="noon", tool_call_id="c2"),
            Message(role="user", content=[ContentPart(type="image", data="AAAA", mime_type="image/jpeg")]),
        ]
    )
    contents = GeminiAdapter().build_body(request)["contents"]
    assert [c["role"] for c in contents] == ["user", "model", "user", "user"]
    assert contents[1]["parts"][0] == {"functionCall": {"name": "get_weather", "args": {"city": "Paris"}}}
    responses = [p["functionResponse"] for p in contents[2]["parts"]]
    assert responses == [
        {"name": "get_weather", "response": {"temp": 21}, "id": "c1"},
        {"name": "get_time", "response": {"content": "noon"}, "id": "c2"},
    ]
    assert contents[3]["parts"] == [{"inlineData": {"mimeType": "image/jpeg", "data": "AAAA"}}]


def test_unresolvable_function_name_is_rejected():
    request = user_request()
    request.messages.append(Message(role="tool", content="x", tool_call_id="unknown"))
    with pytest.raises(ConfigurationError) as info:
        GeminiAdapter().build_body(request)
    assert info.value.code is ErrorCode.VALIDATION


def test_blank_model_turns_are_not_sent():
    request = user_request("hi")
    request.messages.extend([Message(role="assistant", content=""), Message(role="user", content="again")])
    contents = GeminiAdapter().build_body(request)["contents"]
    assert [c["role"] for c in contents] == ["user", "user"]
    assert all(c["parts"] for c in contents)


def test_stream_chunks_fold_text_calls_and_metadata():
    events = parse_events(
        sse_body(
            {"responseId": "r1", "modelVersion": "gemini-test", "candidates": [{"content": {"parts": [{"text": "thinking", "thought": True}, {"text": "It is "}]}}]},
            {"candidates": [{"content": {"parts": [{"text": "sunny."}, {"functionCall": {"name": "get_weather", "args": {"city": "Paris"}}}]}}]},
            {
                "candidates": [{"finishReason": "STOP", "safetyRatings": [{"category": "HARM_CATEGORY_HARASSMENT", "probability": "NEGLIGIBLE"}]}],
                "usageMetadata": {"promptTokenCount": 8, "candidatesTokenCount": 5},
            },
            done=False,
        )
    )
    response = GeminiAdapter().decode_stream(events)
    assert response.content == "It is sunny."
    assert response.model == "gemini-test"
    assert response.response_id == "r1"
    assert response.finish_reason == "STOP"
    assert response.usage.total_tokens == 13
    assert response.metadata["safety_ratings"][0]["probability"] == "NEGLIGIBLE"
    call = response.tool_calls[0]
    assert call.name == "get_weather"
    assert call.id.startswith("get_weather_")
    assert call.arguments_dict() == {"city": "Paris"}


def test_blocked_prompt_yields_empty_turn():
    response = GeminiAdapter().decode_body({"promptFeedback": {"blockReason": "SAFETY"}})
    assert response.content == ""
    assert response.finish_reason == "SAFETY"
    assert response.metadata["prompt_feedback"] == {"blockReason": "SAFETY"}


def test_error_and_unknown_bodies():
    adapter = GeminiAdapter()
    with pytest.raises(ProviderError) as info:
        adapter.decode_body({"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}})
    assert "overloaded" in info.value.message
    with pytest.raises(ResponseFormatError):
        adapter.decode_body({"something": "else"})
    err = adapter.http_error(400, b'[{"error": {"message": "API key not valid"}}]')
    assert err.code is ErrorCode.VALIDATION
    assert "API key not valid" in err.message
