"""Two-turn tool loops through the engine for each continuation style."""
from __future__ import annotations

import httpx

from llm_bridge.base.dto import VendorSettings
from llm_bridge.base.engine import LLMEngine
from llm_bridge.base.transport import HttpTransport
from llm_bridge.tests.helpers import WEATHER_TOOL, FakeServer, sse_body, streamed, user_request


def _engine(vendor: str, server: FakeServer) -> LLMEngine:
    return LLMEngine(vendor, settings=VendorSettings(api_key="k"), transport=HttpTransport(client=server.client()))


def test_openai_second_turn_sends_previous_response_id():
    call = {"type": "function_call", "call_id": "call_1", "name": "get_weather", "arguments": '{"city": "Paris"}'}
    first = sse_body(
        {"type": "response.output_item.done", "item": call},
        {"type": "response.completed", "response": {"id": "resp_1", "status": "completed", "output": [call]}},
        done=False,
        typed=True,
    )
    final = {
        "object": "response",
        "id": "resp_2",
        "status": "completed",
        "output": [{"type": "message", "content": [{"type": "output_text", "text": "Sunny in Paris."}]}],
    }
    server = FakeServer([streamed([first]), httpx.Response(200, json=final)])
    engine = _engine("openai", server)
    request = user_request(tools=[WEATHER_TOOL])

    turn = engine.stream_request(request)
    state = engine.next_state(request, turn)
    follow_up = engine.continue_with_tool_results(state, [{"tool_call_id": "call_1", "content": "sunny"}])
    answer = engine.request(follow_up)

    assert answer.content == "Sunny in Paris."
    second = server.json_bodies()[1]
    assert second["previous_response_id"] == "resp_1"
    assert second["input"] == [{"type": "function_call_output", "call_id": "call_1", "output": "sunny"}]
    assert second["tools"][0]["name"] == "get_weather"


def test_anthropic_second_turn_replays_history():
    first = sse_body(
        {"type": "message_start", "message": {"id": "msg_1", "model": "claude-test"}},
        {"type": "content_block_start", "index": 0, "content_block": {"type": "tool_use", "id": "toolu_1", "name": "get_weather", "input": {}}},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "input_json_delta", "partial_json": '{"city": "Paris"}'}},
        {"type": "message_delta", "delta": {"stop_reason": "tool_use"}},
        {"type": "message_stop"},
        done=False,
        typed=True,
    )
    final = {"id": "msg_2", "type": "message", "content": [{"type": "text", "text": "Sunny."}], "stop_reason": "end_turn"}
    server = FakeServer([streamed([first]), httpx.Response(200, json=final)])
    engine = _engine("anthropic", server)
    request = user_request(tools=[WEATHER_TOOL])

    turn = engine.stream_request(request)
    follow_up = engine.continue_with_tool_results(
        engine.next_state(request, turn), [{"tool_call_id": "toolu_1", "content": "sunny"}]
    )
    assert engine.request(follow_up).is_terminal()

    messages = server.json_bodies()[1]["messages"]
    assert [m["role"] for m in messages] == ["user", "assistant", "user"]
    assert messages[1]["content"] == [{"type": "tool_use", "id": "toolu_1", "name": "get_weather", "input": {"city": "Paris"}}]
    assert messages[2]["content"][0]["tool_use_id"] == "toolu_1"


def test_gemini_second_turn_names_function_response():
    first = sse_body(
        {"candidates": [{"content": {"role": "model", "parts": [{"functionCall": {"id": "fc_1", "name": "get_weather", "args": {"city": "Paris"}}}]}, "finishReason": "STOP"}]},
        done=False,
    )
    final = {"candidates": [{"content": {"parts": [{"text": "Sunny."}]}, "finishReason": "STOP"}]}
    server = FakeServer([streamed([first]), httpx.Response(200, json=final)])
    engine = _engine("gemini", server)
    request = user_request(tools=[WEATHER_TOOL])

    turn = engine.stream_request(request)
    assert turn.tool_calls[0].id == "fc_1"
    follow_up = engine.continue_with_tool_results(
        engine.next_state(request, turn), [{"tool_call_id": "fc_1", "content": {"forecast": "sunny"}}]
    )
    assert engine.request(follow_up).content == "Sunny."

    contents = server.json_bodies()[1]["contents"]
    assert contents[-1] == {
        "role": "user",
        "parts": [{"functionResponse": {"name": "get_weather", "response": {"forecast": "sunny"}, "id": "fc_1"}}],
    }
    assert str(server.requests[1].url).endswith(":generateContent")
