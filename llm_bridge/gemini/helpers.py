"""Gemini ``generateContent`` request and response helpers.

Purpose:
- Build ``contents``, ``tools`` and ``toolConfig`` for the Generative
  Language REST API and read candidates back.

Notes:
- Gemini roles are ``user`` and ``model``; tool results are sent as
  ``functionResponse`` parts in a ``user`` turn and are keyed by function
  *name*, so the name is recovered from the assistant turn that issued the
  call when the tool message does not carry it.
- Safety ratings and citation sources have no canonical field and are
  surfaced through ``CanonicalResponse.metadata``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from ..base.adapter_base import parse_arguments
from ..base.errors import ConfigurationError, ErrorCode
from ..base.models import CanonicalRequest, ContentPart, Message, ToolChoice, ToolSpec, specific_tool_name

_MODES = {"auto": "AUTO", "none": "NONE", "required": "ANY"}


def model_path(model: str) -> str:
    """Return ``models/<id>`` regardless of whether ``model`` carries the prefix."""
    return model if model.startswith("models/") else f"models/{model}"


def encode_part(part: ContentPart) -> Dict[str, Any]:
    if part.type == "text":
        return {"text": part.text or ""}
    mime = part.mime_type or ("image/png" if part.type == "image" else "application/octet-stream")
    if part.data:
        return {"inlineData": {"mimeType": mime, "data": part.data}}
    return {"fileData": {"mimeType": mime, "fileUri": part.url or part.file_id}}


def _function_response(message: Message, names: Dict[str, str]) -> Dict[str, Any]:
    name = message.name or names.get(message.tool_call_id or "")
    if not name:
        raise ConfigurationError(
            code=ErrorCode.VALIDATION,
            message=f"cannot resolve the function name for tool result {message.tool_call_id!r}",
            provider="gemini",
        )
    text = message.text_or_joined()
    try:
        decoded = json.loads(text)
    except ValueError:
        decoded = None
    response = decoded if isinstance(decoded, dict) else {"content": text}
    part: Dict[str, Any] = {"name": name, "response": response}
    if message.tool_call_id:
        part["id"] = message.tool_call_id
    return {"functionResponse": part}


def encode_contents(request: CanonicalRequest) -> List[Dict[str, Any]]:
    contents: List[Dict[str, Any]] = []
    names: Dict[str, str] = {}
    last_was_tool = False
    for message in request.non_system_messages():
        if message.role == "assistant" and message.is_empty():
            continue
        if message.role == "tool":
            part = _function_response(message, names)
            if last_was_tool:
                contents[-1]["parts"].append(part)
            else:
                contents.append({"role": "user", "parts": [part]})
            last_was_tool = True
            continue
        last_was_tool = False
        if message.role == "assistant":
            parts: List[Dict[str, Any]] = []
            text = message.text_or_joined()
            if text:
                parts.append({"text": text})
            for call in message.tool_calls:
                names[call.id] = call.name
                parts.append({"functionCall": {"name": call.name, "args": parse_arguments(call.arguments)}})
            contents.append({"role": "model", "parts": parts})
            continue
        if isinstance(message.content, str):
            contents.append({"role": "user", "parts": [{"text": message.content}]})
        else:
            contents.append({"role": "user", "parts": [encode_part(p) for p in message.content]})
    return contents


def encode_tools(tools: List[ToolSpec]) -> List[Dict[str, Any]]:
    return [
        {
            "functionDeclarations": [
                {"name": t.name, "description": t.description, "parameters": dict(t.parameters)}
                for t in tools
            ]
        }
    ]


def encode_tool_config(choice: Optional[ToolChoice]) -> Optional[Dict[str, Any]]:
    if choice is None:
        return None
    name = specific_tool_name(choice)
    if name:
        return {"functionCallingConfig": {"mode": "ANY", "allowedFunctionNames": [name]}}
    return {"functionCallingConfig": {"mode": _MODES[str(choice)]}}


def first_candidate(body: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    candidates = body.get("candidates")
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], Mapping):
        return candidates[0]
    return None


def candidate_parts(candidate: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    content = candidate.get("content")
    if not isinstance(content, Mapping):
        return []
    return [p for p in content.get("parts") or [] if isinstance(p, Mapping)]


def candidate_metadata(candidate: Mapping[str, Any]) -> Dict[str, Any]:
    """Extract safety ratings and citation sources from a candidate."""
    meta: Dict[str, Any] = {}
    ratings = candidate.get("safetyRatings")
    if ratings:
        meta["safety_ratings"] = list(ratings)
    citations = candidate.get("citationMetadata")
    if isinstance(citations, Mapping):
        sources = citations.get("citationSources") or citations.get("citations")
        if sources:
            meta["citations"] = list(sources)
    return meta


__all__ = [
    "model_path",
    "encode_part",
    "encode_contents",
    "encode_tools",
    "encode_tool_config",
    "first_candidate",
    "candidate_parts",
    "candidate_metadata",
]
