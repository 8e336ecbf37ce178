"""OpenAI adapter (Responses API).

Summary:
- ``POST {base}/responses`` with ``instructions``/``input`` payloads.
- Completed-item tool extraction: each ``function_call`` output item arrives
  whole, either in the response body or in ``response.output_item.done``.
- Stateful continuation: the response ``id`` is the continuation token and a
  follow-up turn sends ``previous_response_id`` plus the tool outputs only.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..base.adapter_base import BaseVendorAdapter, clamp
from ..base.continuation.strategy import ContinuationStrategy
from ..base.dto import VendorSettings
from ..base.models import CanonicalRequest, CanonicalResponse, Usage
from ..base.sse import StreamEvent
from ..base.streaming import StreamState
from ..base.tools import CompletedItemCollector, ToolStrategy
from ..config.defaults import OPENAI_DEFAULT_BASE_URL
from .helpers import encode_input, encode_tool_choice, encode_tools, output_text, record_calls
from .stream_helpers import (
    FAILURE_EVENTS,
    FINAL_EVENTS,
    TEXT_DELTA_EVENTS,
    apply_final,
    note_response,
    record_item,
    text_delta,
)


class OpenAIAdapter(BaseVendorAdapter):
    """Codec for the OpenAI Responses API."""

    vendor = "openai"
    default_base_url = OPENAI_DEFAULT_BASE_URL
    tool_strategy = ToolStrategy.COMPLETED_ITEM
    continuation_strategy = ContinuationStrategy.STATEFUL_ID

    def endpoint(self, request: CanonicalRequest, settings: VendorSettings) -> str:
        return f"{self.base_url(settings)}/responses"

    def build_headers(self, settings: VendorSettings) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {settings.api_key}"}
        if settings.organization:
            headers["OpenAI-Organization"] = settings.organization
        return headers

    def build_body(self, request: CanonicalRequest) -> Dict[str, Any]:
        body: Dict[str, Any] = {"model": request.model, "input": encode_input(request)}
        instructions = request.system_text()
        if instructions:
            body["instructions"] = instructions
        temperature = clamp(request.temperature, 0.0, 1.0)
        if temperature is not None:
            body["temperature"] = temperature
        if request.max_tokens is not None:
            body["max_output_tokens"] = int(request.max_tokens)
        if request.tools:
            body["tools"] = encode_tools(request.tools)
            choice = encode_tool_choice(request.tool_choice)
            if choice is not None:
                body["tool_choice"] = choice
        if request.continuation_token:
            body["previous_response_id"] = request.continuation_token
        if request.stream:
            body["stream"] = True
        return body

    def decode_body(self, body: Any) -> CanonicalResponse:
        if not isinstance(body, Mapping) or body.get("object") != "response":
            raise self.format_error("expected an object of type 'response'")
        if body.get("status") == "failed" and body.get("error"):
            raise self.stream_error(body, "response failed")
        collector = CompletedItemCollector()
        record_calls(collector, body.get("output"))
        usage = body.get("usage") or {}
        metadata: Dict[str, Any] = {}
        incomplete = body.get("incomplete_details")
        if isinstance(incomplete, Mapping) and incomplete.get("reason"):
            metadata["incomplete_reason"] = incomplete["reason"]
        response_id: Optional[str] = body.get("id")
        return CanonicalResponse(
            content=output_text(body.get("output")),
            usage=Usage(
                prompt_tokens=usage.get("input_tokens", 0),
                completion_tokens=usage.get("output_tokens", 0),
            ),
            model=str(body.get("model") or ""),
            finish_reason=str(body.get("status") or ""),
            tool_calls=collector.calls(),
            continuation_token=response_id,
            vendor=self.vendor,
            response_id=response_id,
            metadata=metadata,
            raw=body,
        )

    def apply_event(self, state: StreamState, event: StreamEvent) -> None:
        payload = event.payload
        if not isinstance(payload, Mapping):
            return
        kind = payload.get("type") or event.type
        if kind in TEXT_DELTA_EVENTS:
            state.add_text(text_delta(payload))
        elif kind == "response.output_item.done":
            index = payload.get("output_index")
            record_item(state, payload.get("item"), index if isinstance(index, int) else None)
        elif kind in FINAL_EVENTS:
            apply_final(state, payload.get("response"))
        elif kind in FAILURE_EVENTS:
            source = payload.get("response") if isinstance(payload.get("response"), Mapping) else payload
            raise self.stream_error(source, "response failed")
        elif kind in ("response.created", "response.in_progress"):
            note_response(state, payload.get("response"))

    def continuation_token_for(self, state: StreamState) -> Optional[str]:
        return state.response_id


__all__ = ["OpenAIAdapter"]
