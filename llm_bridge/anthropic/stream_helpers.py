"""Anthropic streaming helpers.

Purpose:
- Fold the typed Messages stream into a :class:`StreamState`.

Event order: ``message_start``, then per content block
``content_block_start`` / ``content_block_delta``* / ``content_block_stop``,
then ``message_delta`` (stop reason, output tokens) and ``message_stop``.
``ping`` events are keep-alives. Tool input arrives as ``input_json_delta``
fragments keyed by the content block ``index``.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..base.streaming import StreamState
from ..base.tools import encode_arguments


def on_message_start(state: StreamState, payload: Mapping[str, Any]) -> None:
    message = payload.get("message")
    if not isinstance(message, Mapping):
        return
    state.note_model(message.get("model"))
    state.note_response_id(message.get("id"))
    usage = message.get("usage")
    if isinstance(usage, Mapping):
        state.set_usage(usage.get("input_tokens"), usage.get("output_tokens"))


def on_block_start(state: StreamState, payload: Mapping[str, Any]) -> None:
    block = payload.get("content_block")
    if not isinstance(block, Mapping):
        return
    index = int(payload.get("index") or 0)
    if block.get("type") == "tool_use":
        # Usually ``{}`` here with the input streamed as deltas; a full input
        # is used only when no delta follows.
        initial = block.get("input")
        state.start_tool(
            index,
            call_id=block.get("id"),
            name=block.get("name"),
            arguments=encode_arguments(initial) if isinstance(initial, Mapping) and initial else None,
        )
    elif block.get("type") == "text":
        state.add_text(block.get("text"))


def on_block_delta(state: StreamState, payload: Mapping[str, Any]) -> None:
    delta = payload.get("delta")
    if not isinstance(delta, Mapping):
        return
    index = int(payload.get("index") or 0)
    kind = delta.get("type")
    if kind == "text_delta":
        state.add_text(delta.get("text"))
    elif kind == "input_json_delta":
        state.append_tool_fragment(index, delta.get("partial_json"))


def on_message_delta(state: StreamState, payload: Mapping[str, Any]) -> None:
    usage = payload.get("usage")
    if isinstance(usage, Mapping):
        state.set_usage(usage.get("input_tokens"), usage.get("output_tokens"))
    delta = payload.get("delta")
    if isinstance(delta, Mapping):
        if delta.get("stop_sequence"):
            state.metadata["stop_sequence"] = delta["stop_sequence"]
        state.note_finish(delta.get("stop_reason"))


def on_message_stop(state: StreamState, payload: Mapping[str, Any]) -> None:  # noqa: ARG001
    state.completed = True


HANDLERS = {
    "message_start": on_message_start,
    "content_block_start": on_block_start,
    "content_block_delta": on_block_delta,
    "message_delta": on_message_delta,
    "message_stop": on_message_stop,
}


__all__ = [
    "HANDLERS",
    "on_message_start",
    "on_block_start",
    "on_block_delta",
    "on_message_delta",
    "on_message_stop",
]
