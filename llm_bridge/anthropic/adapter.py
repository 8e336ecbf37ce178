"""Anthropic adapter (Messages API).

- ``POST {base}/messages`` with ``x-api-key`` and ``anthropic-version``.
- Delta-accumulation tool extraction keyed by content block index.
- History-rebuild continuation.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from ..base.adapter_base import BaseVendorAdapter, clamp
from ..base.continuation.strategy import ContinuationStrategy
from ..base.dto import VendorSettings
from ..base.models import CanonicalRequest, CanonicalResponse, Usage
from ..base.sse import StreamEvent
from ..base.streaming import StreamState
from ..base.tools import CompletedItemCollector, ToolStrategy
from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MAX_TOKENS,
)
from .helpers import encode_messages, encode_tool_choice, encode_tools
from .stream_helpers import HANDLERS


class AnthropicAdapter(BaseVendorAdapter):
    """Codec for the Anthropic Messages API."""

    vendor = "anthropic"
    default_base_url = ANTHROPIC_DEFAULT_BASE_URL
    tool_strategy = ToolStrategy.DELTA_ACCUMULATION
    continuation_strategy = ContinuationStrategy.HISTORY_REBUILD

    def endpoint(self, request: CanonicalRequest, settings: VendorSettings) -> str:
        return f"{self.base_url(settings)}/messages"

    def build_headers(self, settings: VendorSettings) -> Dict[str, str]:
        return {"x-api-key": str(settings.api_key), "anthropic-version": ANTHROPIC_API_VERSION}

    def build_body(self, request: CanonicalRequest) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": request.model,
            "max_tokens": int(request.max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS),
            "messages": encode_messages(request),
        }
        system = request.system_text()
        if system:
            body["system"] = system
        temperature = clamp(request.temperature, 0.0, 1.0)
        if temperature is not None:
            body["temperature"] = temperature
        if request.tools:
            body["tools"] = encode_tools(request.tools)
            choice = encode_tool_choice(request.tool_choice)
            if choice is not None:
                body["tool_choice"] = choice
        if request.stream:
            body["stream"] = True
        return body

    def decode_body(self, body: Any) -> CanonicalResponse:
        if isinstance(body, Mapping) and body.get("type") == "error":
            raise self.stream_error(body, "message failed")
        if not isinstance(body, Mapping) or not isinstance(body.get("content"), list):
            raise self.format_error("expected a message with a 'content' list")
        texts = []
        collector = CompletedItemCollector()
        for block in body["content"]:
            if not isinstance(block, Mapping):
                continue
            if block.get("type") == "text":
                texts.append(str(block.get("text") or ""))
            elif block.get("type") == "tool_use" and block.get("name"):
                collector.record(block.get("id"), str(block["name"]), block.get("input") or {})
        usage = body.get("usage") or {}
        metadata: Dict[str, Any] = {}
        if body.get("stop_sequence"):
            metadata["stop_sequence"] = body["stop_sequence"]
        return CanonicalResponse(
            content="".join(texts),
            usage=Usage(
                prompt_tokens=usage.get("input_tokens", 0),
                completion_tokens=usage.get("output_tokens", 0),
            ),
            model=str(body.get("model") or ""),
            finish_reason=str(body.get("stop_reason") or ""),
            tool_calls=collector.calls(),
            continuation_token=None,
            vendor=self.vendor,
            response_id=body.get("id"),
            metadata=metadata,
            raw=body,
        )

    def apply_event(self, state: StreamState, event: StreamEvent) -> None:
        payload = event.payload
        if not isinstance(payload, Mapping):
            return
        kind = payload.get("type") or event.type
        if kind == "error":
            raise self.stream_error(payload)
        handler = HANDLERS.get(str(kind))
        if handler is not None:
            handler(state, payload)


__all__ = ["AnthropicAdapter"]
