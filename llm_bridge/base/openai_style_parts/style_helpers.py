"""
Helper utilities for OpenAI-compatible Chat Completions vendors.

Purpose:
- Translate canonical messages, tools and tool choice into the
  chat-completions wire shapes shared by Grok (xAI) and OpenRouter.
- Interpret ``choices[0].message`` bodies and ``choices[0].delta`` chunks.

No network I/O; functions only prepare inputs or interpret outputs.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..models import CanonicalRequest, ContentPart, Message, ToolChoice, ToolSpec, specific_tool_name


def encode_content(content: Any) -> Any:
    """Return a string unchanged or a list of chat-completions content parts."""
    if isinstance(content, str):
        return content
    parts: List[Dict[str, Any]] = []
    for part in content:
        parts.append(_encode_part(part))
    return parts


def _encode_part(part: ContentPart) -> Dict[str, Any]:
    if part.type == "image":
        return {"type": "image_url", "image_url": {"url": part.data_url()}}
    if part.type == "file":
        if part.file_id:
            return {"type": "file", "file": {"file_id": part.file_id}}
        return {"type": "file", "file": {"file_data": part.data_url()}}
    return {"type": "text", "text": part.text or ""}


def encode_message(message: Message) -> Dict[str, Any]:
    """Translate one canonical message into a chat-completions message."""
    if message.role == "tool":
        return {
            "role": "tool",
            "tool_call_id": message.tool_call_id,
            "content": message.text_or_joined(),
        }
    out: Dict[str, Any] = {"role": message.role, "content": encode_content(message.content)}
    if message.role == "assistant" and message.tool_calls:
        out["tool_calls"] = [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": call.arguments or "{}"},
            }
            for call in message.tool_calls
        ]
        if out["content"] == "":
            out["content"] = None
    return out


def encode_messages(request: CanonicalRequest) -> List[Dict[str, Any]]:
    return [encode_message(m) for m in request.messages]


def encode_tools(tools: List[ToolSpec]) -> List[Dict[str, Any]]:
    """Nested ``{"type": "function", "function": {...}}`` tool declarations."""
    return [
        {
            "type": "function",
            "function": {
                "name": t.name,
                "description": t.description,
                "parameters": dict(t.parameters),
            },
        }
        for t in tools
    ]


def encode_tool_choice(choice: Optional[ToolChoice]) -> Any:
    if choice is None:
        return None
    name = specific_tool_name(choice)
    if name:
        return {"type": "function", "function": {"name": name}}
    return choice


def first_choice(body: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    choices = body.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
        return choices[0]
    return None


def message_text(content: Any) -> str:
    """Flatten ``message.content`` (string or list of text parts) into text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            str(p.get("text", "")) for p in content if isinstance(p, Mapping) and p.get("type") in ("text", "output_text")
        )
    return ""


__all__ = [
    "encode_content",
    "encode_message",
    "encode_messages",
    "encode_tools",
    "encode_tool_choice",
    "first_choice",
    "message_text",
]
