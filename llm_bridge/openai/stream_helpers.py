"""OpenAI Responses streaming helpers.

Typed events of interest:

- ``response.created`` / ``response.in_progress``: carry the response id and
  model early in the stream.
- ``response.output_text.delta`` (and the older ``response.content.delta``):
  text fragments.
- ``response.output_item.done``: a finished output item; completed
  ``function_call`` items are tool calls.
- ``response.completed`` / ``response.incomplete``: the final response
  object with usage and status.
- ``response.failed`` / ``error``: in-band failure.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..base.streaming import StreamState
from .helpers import is_completed_call, output_text

TEXT_DELTA_EVENTS = ("response.output_text.delta", "response.content.delta")
FINAL_EVENTS = ("response.completed", "response.incomplete")
FAILURE_EVENTS = ("response.failed", "error")


def text_delta(payload: Mapping[str, Any]) -> Optional[str]:
    """Return the text fragment of a delta event (string or ``{"text"}`` form)."""
    delta = payload.get("delta")
    if isinstance(delta, str):
        return delta
    if isinstance(delta, Mapping) and isinstance(delta.get("text"), str):
        return delta["text"]
    return None


def note_response(state: StreamState, response: Any) -> None:
    if not isinstance(response, Mapping):
        return
    state.note_model(response.get("model"))
    state.note_response_id(response.get("id"))


def record_item(state: StreamState, item: Any, position: Optional[int] = None) -> None:
    """Record a completed call; ``position`` is its ``output_index``."""
    if is_completed_call(item):
        state.complete_tool(
            item.get("call_id") or item.get("id"), str(item["name"]), item.get("arguments"), position
        )


def apply_final(state: StreamState, response: Any) -> None:
    """Fold the terminal ``response`` object into ``state``.

    Tool calls already recorded from ``output_item.done`` events are recorded
    again by id (or by output position when the item has none), which leaves
    them unchanged. Text is only taken from the
    summary when no delta arrived.
    """
    if not isinstance(response, Mapping):
        return
    note_response(state, response)
    usage = response.get("usage")
    if isinstance(usage, Mapping):
        state.set_usage(usage.get("input_tokens"), usage.get("output_tokens"))
    output = response.get("output")
    for position, item in enumerate(output or []):
        record_item(state, item, position)
    if not state.text_parts:
        state.add_text(output_text(output))
    incomplete = response.get("incomplete_details")
    if isinstance(incomplete, Mapping) and incomplete.get("reason"):
        state.metadata["incomplete_reason"] = incomplete["reason"]
    state.note_finish(response.get("status"))
    state.completed = True


__all__ = [
    "TEXT_DELTA_EVENTS",
    "FINAL_EVENTS",
    "FAILURE_EVENTS",
    "text_delta",
    "note_response",
    "record_item",
    "apply_final",
]
