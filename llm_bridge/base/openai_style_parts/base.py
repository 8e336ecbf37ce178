"""ChatCompletionsAdapter: shared codec for OpenAI-compatible vendors.

Purpose:
- Provide one reusable adapter for vendors speaking the Chat Completions
  protocol (``POST /chat/completions``), so Grok and OpenRouter only declare
  their base URL, headers and small body tweaks.

Streaming format:
- ``data:`` chunks carrying ``choices[0].delta``; text arrives in
  ``delta.content`` and tool calls as ``delta.tool_calls[i]`` fragments keyed
  by ``index`` (delta-accumulation strategy). ``finish_reason`` closes the
  accumulator; a trailing chunk may carry ``usage``; ``[DONE]`` ends the
  stream. A chunk with a top-level ``error`` object is an in-band failure.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from ..adapter_base import BaseVendorAdapter, clamp
from ..continuation.strategy import ContinuationStrategy
from ..dto import VendorSettings
from ..models import CanonicalRequest, CanonicalResponse, Usage
from ..sse import StreamEvent
from ..streaming import StreamState
from ..tools import CompletedItemCollector, ToolStrategy
from .style_helpers import (
    encode_messages,
    encode_tool_choice,
    encode_tools,
    first_choice,
    message_text,
)


class ChatCompletionsAdapter(BaseVendorAdapter):
    """Adapter for OpenAI-compatible ``/chat/completions`` endpoints."""

    tool_strategy = ToolStrategy.DELTA_ACCUMULATION
    continuation_strategy = ContinuationStrategy.HISTORY_REBUILD
    temperature_range = (0.0, 2.0)
    completions_path = "/chat/completions"

    def endpoint(self, request: CanonicalRequest, settings: VendorSettings) -> str:
        return f"{self.base_url(settings)}{self.completions_path}"

    def build_headers(self, settings: VendorSettings) -> Dict[str, str]:
        return {"Authorization": f"Bearer {settings.api_key}"}

    def build_body(self, request: CanonicalRequest) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": request.model,
            "messages": encode_messages(request),
        }
        temperature = clamp(request.temperature, *self.temperature_range)
        if temperature is not None:
            body["temperature"] = temperature
        if request.max_tokens is not None:
            body["max_tokens"] = int(request.max_tokens)
        if request.tools:
            body["tools"] = encode_tools(request.tools)
            choice = encode_tool_choice(request.tool_choice)
            if choice is not None:
                body["tool_choice"] = choice
        if request.stream:
            body["stream"] = True
            body["stream_options"] = {"include_usage": True}
        return body

    # ----- Non-streaming -----
    def decode_body(self, body: Any) -> CanonicalResponse:
        if not isinstance(body, Mapping):
            raise self.format_error("chat completion body is not an object")
        if body.get("error") and not body.get("choices"):
            raise self.stream_error(body, "chat completion returned an error")
        choice = first_choice(body)
        if choice is None or not isinstance(choice.get("message"), Mapping):
            raise self.format_error("chat completion has no choices[0].message", model=body.get("model"))
        message = choice["message"]
        collector = CompletedItemCollector()
        for raw_call in message.get("tool_calls") or []:
            if not isinstance(raw_call, Mapping):
                continue
            fn = raw_call.get("function") or {}
            if not fn.get("name"):
                continue
            collector.record(raw_call.get("id"), str(fn["name"]), fn.get("arguments"))
        usage = body.get("usage") or {}
        return CanonicalResponse(
            content=message_text(message.get("content")),
            usage=Usage(
                prompt_tokens=usage.get("prompt_tokens", 0),
                completion_tokens=usage.get("completion_tokens", 0),
            ),
            model=str(body.get("model") or ""),
            finish_reason=str(choice.get("finish_reason") or ""),
            tool_calls=collector.calls(),
            continuation_token=None,
            vendor=self.vendor,
            response_id=body.get("id"),
            metadata=self.response_metadata(body),
            raw=body,
        )

    def response_metadata(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        return {}

    # ----- Streaming -----
    def apply_event(self, state: StreamState, event: StreamEvent) -> None:
        payload = event.payload
        if not isinstance(payload, Mapping):
            return
        if payload.get("error"):
            raise self.stream_error(payload)
        state.note_model(payload.get("model"))
        state.note_response_id(payload.get("id"))
        usage = payload.get("usage")
        if isinstance(usage, Mapping):
            state.set_usage(usage.get("prompt_tokens"), usage.get("completion_tokens"))
        choice = first_choice(payload)
        if choice is None:
            return
        delta = choice.get("delta") or {}
        if isinstance(delta, Mapping):
            state.add_text(delta.get("content") if isinstance(delta.get("content"), str) else None)
            for position, raw_call in enumerate(delta.get("tool_calls") or []):
                if not isinstance(raw_call, Mapping):
                    continue
                fn = raw_call.get("function") or {}
                index = raw_call.get("index")
                state.append_tool_fragment(
                    int(index) if isinstance(index, int) else position,
                    fn.get("arguments"),
                    call_id=raw_call.get("id"),
                    name=fn.get("name"),
                )
        state.note_finish(choice.get("finish_reason"))


__all__ = ["ChatCompletionsAdapter"]
