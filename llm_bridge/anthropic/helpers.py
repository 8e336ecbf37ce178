"""Anthropic Messages API request helpers.

Purpose:
- Build the ``messages`` list, tool declarations and ``tool_choice`` for
  ``POST /messages``.

Notes:
- Tool results must be ``tool_result`` blocks inside a ``user`` message.
  Consecutive tool messages are merged into a single user turn because the
  API rejects two user turns in a row.
- Assistant tool calls are replayed as ``tool_use`` blocks with their decoded
  ``input`` mapping.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.adapter_base import parse_arguments
from ..base.models import CanonicalRequest, ContentPart, Message, ToolChoice, ToolSpec, specific_tool_name


def encode_part(part: ContentPart) -> Dict[str, Any]:
    """Map a canonical part to an Anthropic content block."""
    if part.type == "image":
        if part.data:
            return {
                "type": "image",
                "source": {"type": "base64", "media_type": part.mime_type or "image/png", "data": part.data},
            }
        return {"type": "image", "source": {"type": "url", "url": part.url}}
    if part.type == "file":
        if part.file_id:
            return {"type": "document", "source": {"type": "file", "file_id": part.file_id}}
        if part.data:
            return {
                "type": "document",
                "source": {
                    "type": "base64",
                    "media_type": part.mime_type or "application/pdf",
                    "data": part.data,
                },
            }
        return {"type": "document", "source": {"type": "url", "url": part.url}}
    return {"type": "text", "text": part.text or ""}


def _assistant_blocks(message: Message) -> List[Dict[str, Any]]:
    blocks: List[Dict[str, Any]] = []
    text = message.text_or_joined()
    if text:
        blocks.append({"type": "text", "text": text})
    for call in message.tool_calls:
        blocks.append(
            {"type": "tool_use", "id": call.id, "name": call.name, "input": parse_arguments(call.arguments)}
        )
    return blocks


def encode_messages(request: CanonicalRequest) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for message in request.non_system_messages():
        if message.role == "assistant" and message.is_empty():
            continue
        if message.role == "tool":
            block = {
                "type": "tool_result",
                "tool_use_id": message.tool_call_id,
                "content": message.text_or_joined(),
            }
            if out and out[-1].get("_tool_results"):
                out[-1]["content"].append(block)
            else:
                out.append({"role": "user", "content": [block], "_tool_results": True})
            continue
        if message.role == "assistant" and message.tool_calls:
            out.append({"role": "assistant", "content": _assistant_blocks(message)})
            continue
        content: Any = (
            message.content if isinstance(message.content, str) else [encode_part(p) for p in message.content]
        )
        out.append({"role": message.role, "content": content})
    for entry in out:
        entry.pop("_tool_results", None)
    return out


def encode_tools(tools: List[ToolSpec]) -> List[Dict[str, Any]]:
    return [
        {"name": t.name, "description": t.description, "input_schema": dict(t.parameters)}
        for t in tools
    ]


_CHOICE_TYPES = {"auto": "auto", "required": "any", "none": "none"}


def encode_tool_choice(choice: Optional[ToolChoice]) -> Optional[Dict[str, Any]]:
    """``auto``→auto, ``required``→any, ``none``→none, ``{"name"}``→tool."""
    if choice is None:
        return None
    name = specific_tool_name(choice)
    if name:
        return {"type": "tool", "name": name}
    return {"type": _CHOICE_TYPES[str(choice)]}


__all__ = ["encode_part", "encode_messages", "encode_tools", "encode_tool_choice"]
