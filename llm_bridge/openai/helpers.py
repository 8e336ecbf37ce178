"""OpenAI Responses API request helpers.

Purpose:
- Translate canonical messages into the Responses API ``input`` item list and
  interpret ``output`` items of a ``response`` object.

External dependencies:
- None. Pure dictionary shaping shared by the adapter and stream helpers.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..base.models import CanonicalRequest, ContentPart, Message, ToolChoice, ToolSpec, specific_tool_name
from ..base.tools import CompletedItemCollector


def encode_part(part: ContentPart) -> Dict[str, Any]:
    """Map a canonical content part to an ``input_*`` part."""
    if part.type == "image":
        return {"type": "input_image", "image_url": part.data_url()}
    if part.type == "file":
        if part.file_id:
            return {"type": "input_file", "file_id": part.file_id}
        return {"type": "input_file", "file_data": part.data_url()}
    return {"type": "input_text", "text": part.text or ""}


def encode_input(request: CanonicalRequest) -> List[Dict[str, Any]]:
    """Build the ``input`` list; system text travels in ``instructions``.

    Assistant tool calls become ``function_call`` items and tool results
    ``function_call_output`` items, so a replayed history keeps the pairing
    the API expects.
    """
    items: List[Dict[str, Any]] = []
    for message in request.non_system_messages():
        items.extend(_encode_message(message))
    return items


def _encode_message(message: Message) -> Iterable[Dict[str, Any]]:
    if message.role == "tool":
        yield {
            "type": "function_call_output",
            "call_id": message.tool_call_id,
            "output": message.text_or_joined(),
        }
        return
    if message.role == "assistant":
        text = message.text_or_joined()
        if text:
            yield {"role": "assistant", "content": text}
        for call in message.tool_calls:
            yield {
                "type": "function_call",
                "call_id": call.id,
                "name": call.name,
                "arguments": call.arguments or "{}",
            }
        return
    if isinstance(message.content, str):
        yield {"role": message.role, "content": [{"type": "input_text", "text": message.content}]}
    else:
        yield {"role": message.role, "content": [encode_part(p) for p in message.content]}


def encode_tools(tools: List[ToolSpec]) -> List[Dict[str, Any]]:
    """Flat function tools: ``{type, name, description, parameters}``."""
    return [
        {
            "type": "function",
            "name": t.name,
            "description": t.description,
            "parameters": dict(t.parameters),
        }
        for t in tools
    ]


def encode_tool_choice(choice: Optional[ToolChoice]) -> Any:
    if choice is None:
        return None
    name = specific_tool_name(choice)
    if name:
        return {"type": "function", "name": name}
    return choice


def output_text(output: Any) -> str:
    """Concatenate ``output_text`` parts of every ``message`` output item."""
    texts: List[str] = []
    for item in output or []:
        if not isinstance(item, Mapping) or item.get("type") != "message":
            continue
        for part in item.get("content") or []:
            if isinstance(part, Mapping) and part.get("type") == "output_text":
                texts.append(str(part.get("text") or ""))
    return "".join(texts)


def is_completed_call(item: Any) -> bool:
    return (
        isinstance(item, Mapping)
        and item.get("type") == "function_call"
        and item.get("status", "completed") == "completed"
        and bool(item.get("name"))
    )


def record_calls(collector: CompletedItemCollector, output: Any) -> None:
    """Record every completed ``function_call`` output item."""
    for position, item in enumerate(output or []):
        if is_completed_call(item):
            collector.record(
                item.get("call_id") or item.get("id"), str(item["name"]), item.get("arguments"), position
            )


__all__ = [
    "encode_part",
    "encode_input",
    "encode_tools",
    "encode_tool_choice",
    "output_text",
    "is_completed_call",
    "record_calls",
]
