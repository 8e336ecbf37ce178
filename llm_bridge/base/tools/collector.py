"""Id-keyed collection of completed tool calls.

Used for vendors that announce each function call once it is complete (the
OpenAI Responses ``function_call`` item, Gemini ``functionCall`` parts). The
same call may be reported more than once, for example by both the per-item
``done`` event and the final ``response.completed`` summary; recording is
idempotent per id, or per output position for items that carry no id.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Union

from ..models import ToolCall
from .ids import generate_tool_call_id


def encode_arguments(arguments: Union[str, Mapping[str, Any], None]) -> str:
    """Return JSON text for ``arguments`` given as text or as a mapping."""
    if arguments is None:
        return "{}"
    if isinstance(arguments, str):
        return arguments if arguments.strip() else "{}"
    return json.dumps(dict(arguments), ensure_ascii=False)


class CompletedItemCollector:
    """Insertion-ordered, last-write-wins tool call registry."""

    def __init__(self) -> None:
        self._calls: Dict[str, ToolCall] = {}

    def record(
        self,
        call_id: Optional[str],
        name: str,
        arguments: Union[str, Mapping[str, Any], None] = None,
        position: Optional[int] = None,
    ) -> ToolCall:
        """Record one completed call; a repeated key replaces the earlier entry in place.

        The key is ``call_id``. Without one, ``position`` (the item's index in
        the vendor output) identifies the call and its generated id is reused.
        """
        key = call_id or (f"#{position}" if position is not None else None)
        previous = self._calls.get(key) if key else None
        cid = call_id or (previous.id if previous else generate_tool_call_id(name))
        call = ToolCall(id=cid, name=name, arguments=encode_arguments(arguments))
        self._calls[key or cid] = call
        return call

    def calls(self) -> List[ToolCall]:
        return list(self._calls.values())

    def __len__(self) -> int:
        return len(self._calls)


__all__ = ["CompletedItemCollector", "encode_arguments"]
