"""Continuation states and follow-up requests for both strategies."""
from __future__ import annotations

import pytest

from llm_bridge.base.continuation import ContinuationManager, ContinuationStrategy, is_terminal
from llm_bridge.base.dto import ToolResult
from llm_bridge.base.errors import ConfigurationError, ErrorCode, MissingContinuationState
from llm_bridge.base.models import CanonicalResponse, Message, ToolCall
from llm_bridge.tests.helpers import WEATHER_TOOL, user_request

_CALL = ToolCall(id="call_1", name="get_weather", arguments='{"city": "Paris"}')


def _tool_turn(token=None) -> CanonicalResponse:
    return CanonicalResponse(
        content="Checking.",
        finish_reason="tool_calls",
        tool_calls=[_CALL],
        continuation_token=token,
        response_id=token,
    )


def test_stateful_continuation_sends_only_results():
    manager = ContinuationManager()
    request = user_request(tools=[WEATHER_TOOL], temperature=0.3)
    state = manager.state_after_turn("openai", request, _tool_turn("resp_1"))
    assert state.strategy is ContinuationStrategy.STATEFUL_ID
    assert state.can_continue()
    assert state.history == ()

    follow_up = manager.continue_with_tool_results(state, [{"tool_call_id": "call_1", "content": {"temp": 21}}])
    assert follow_up.continuation_token == "resp_1"
    assert follow_up.temperature == 0.3
    assert follow_up.tools == [WEATHER_TOOL]
    assert len(follow_up.messages) == 1
    message = follow_up.messages[0]
    assert (message.role, message.tool_call_id, message.name) == ("tool", "call_1", "get_weather")
    assert message.content == '{"temp": 21}'


def test_history_rebuild_replays_conversation():
    manager = ContinuationManager()
    request = user_request(tools=[WEATHER_TOOL])
    state = manager.state_after_turn("anthropic", request, _tool_turn())
    follow_up = manager.continue_with_tool_results(
        state, [ToolResult(tool_call_id="call_1", content="sunny", name="weather_v2")]
    )
    roles = [m.role for m in follow_up.messages]
    assert roles == ["user", "assistant", "tool"]
    assert follow_up.messages[1].tool_calls == [_CALL]
    assert follow_up.messages[1].content == "Checking."
    assert follow_up.messages[2].name == "weather_v2"
    assert follow_up.continuation_token is None


def test_missing_token_is_fatal_for_stateful_vendor():
    manager = ContinuationManager()
    state = manager.state_after_turn("openai", user_request(), _tool_turn(None))
    assert not state.can_continue()
    with pytest.raises(MissingContinuationState) as info:
        manager.continue_with_tool_results(state, [{"tool_call_id": "call_1", "content": "x"}])
    assert info.value.code is ErrorCode.MISSING_STATE


@pytest.mark.parametrize("results", [[], [{"content": "no id"}], [42]])
def test_invalid_tool_results_are_rejected(results):
    manager = ContinuationManager()
    state = manager.state_after_turn("gemini", user_request(), _tool_turn())
    with pytest.raises(ConfigurationError) as info:
        manager.continue_with_tool_results(state, results)
    assert info.value.code is ErrorCode.VALIDATION


def test_unknown_call_ids_pass_through():
    manager = ContinuationManager()
    state = manager.state_after_turn("grok", user_request(), _tool_turn())
    follow_up = manager.continue_with_tool_results(state, [{"tool_call_id": "call_9", "content": "?"}])
    assert follow_up.messages[-1].tool_call_id == "call_9"
    assert follow_up.messages[-1].name is None


def test_strategy_override_and_terminal_turns():
    manager = ContinuationManager({"OpenAI": ContinuationStrategy.HISTORY_REBUILD})
    assert manager.strategy_for("openai") is ContinuationStrategy.HISTORY_REBUILD
    finished = CanonicalResponse(content="done", finish_reason="completed")
    state = manager.state_after_turn("openai", user_request(), finished)
    assert is_terminal(finished)
    assert not state.can_continue()
    assert state.to_dict()["strategy"] == "history_rebuild"


def test_system_message_survives_history_rebuild():
    manager = ContinuationManager()
    request = user_request()
    request.messages.insert(0, Message(role="system", content="be brief"))
    state = manager.state_after_turn("openrouter", request, _tool_turn())
    follow_up = manager.continue_with_tool_results(state, [{"tool_call_id": "call_1", "content": "ok"}])
    assert follow_up.messages[0].role == "system"
    assert follow_up.system_text() == "be brief"
