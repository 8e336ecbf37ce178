"""Gemini adapter (Generative Language REST API).

- ``POST {base}/models/{model}:generateContent``; streaming uses
  ``:streamGenerateContent?alt=sse`` whose SSE ``data:`` chunks are partial
  ``GenerateContentResponse`` objects.
- The API key travels in the ``x-goog-api-key`` header, never in the URL.
- Completed-item tool extraction: ``functionCall`` parts arrive whole.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from ..base.adapter_base import BaseVendorAdapter, clamp
from ..base.continuation.strategy import ContinuationStrategy
from ..base.dto import VendorSettings
from ..base.models import CanonicalRequest, CanonicalResponse, ModelInfo, Usage, WireResponse
from ..base.sse import StreamEvent
from ..base.streaming import StreamState
from ..base.tools import CompletedItemCollector, ToolStrategy
from ..config.defaults import GEMINI_DEFAULT_BASE_URL
from .helpers import (
    candidate_metadata,
    candidate_parts,
    encode_contents,
    encode_tool_config,
    encode_tools,
    first_candidate,
    model_path,
)


class GeminiAdapter(BaseVendorAdapter):
    """Codec for Gemini ``generateContent`` / ``streamGenerateContent``."""

    vendor = "gemini"
    default_base_url = GEMINI_DEFAULT_BASE_URL
    tool_strategy = ToolStrategy.COMPLETED_ITEM
    continuation_strategy = ContinuationStrategy.HISTORY_REBUILD

    def endpoint(self, request: CanonicalRequest, settings: VendorSettings) -> str:
        path = f"{self.base_url(settings)}/{model_path(request.model)}"
        if request.stream:
            return f"{path}:streamGenerateContent?alt=sse"
        return f"{path}:generateContent"

    def build_headers(self, settings: VendorSettings) -> Dict[str, str]:
        return {"x-goog-api-key": str(settings.api_key)}

    def build_body(self, request: CanonicalRequest) -> Dict[str, Any]:
        body: Dict[str, Any] = {"contents": encode_contents(request)}
        system = request.system_text()
        if system:
            body["systemInstruction"] = {"parts": [{"text": system}]}
        generation: Dict[str, Any] = {}
        temperature = clamp(request.temperature, 0.0, 2.0)
        if temperature is not None:
            generation["temperature"] = temperature
        if request.max_tokens is not None:
            generation["maxOutputTokens"] = int(request.max_tokens)
        if generation:
            body["generationConfig"] = generation
        if request.tools:
            body["tools"] = encode_tools(request.tools)
            config = encode_tool_config(request.tool_choice)
            if config is not None:
                body["toolConfig"] = config
        return body

    def decode_body(self, body: Any) -> CanonicalResponse:
        if not isinstance(body, Mapping):
            raise self.format_error("generateContent body is not an object")
        if body.get("error"):
            raise self.stream_error(body, "generateContent failed")
        state = self.new_stream_state()
        candidate = first_candidate(body)
        if candidate is None:
            feedback = body.get("promptFeedback")
            if not isinstance(feedback, Mapping):
                raise self.format_error("generateContent response has no candidates")
            # Prompt blocked before generation: empty turn, reason surfaced.
            state.metadata["prompt_feedback"] = dict(feedback)
            state.note_finish(feedback.get("blockReason"))
        self._fold_chunk(state, body)
        return state.finish(raw=body)

    def apply_event(self, state: StreamState, event: StreamEvent) -> None:
        payload = event.payload
        if not isinstance(payload, Mapping):
            return
        if payload.get("error"):
            raise self.stream_error(payload)
        self._fold_chunk(state, payload)

    def _fold_chunk(self, state: StreamState, chunk: Mapping[str, Any]) -> None:
        state.note_model(chunk.get("modelVersion"))
        state.note_response_id(chunk.get("responseId"))
        usage = chunk.get("usageMetadata")
        if isinstance(usage, Mapping):
            state.set_usage(usage.get("promptTokenCount"), usage.get("candidatesTokenCount"))
        candidate = first_candidate(chunk)
        if candidate is None:
            return
        for part in candidate_parts(candidate):
            if isinstance(part.get("text"), str) and not part.get("thought"):
                state.add_text(part["text"])
            call = part.get("functionCall")
            if isinstance(call, Mapping) and call.get("name"):
                state.complete_tool(call.get("id"), str(call["name"]), call.get("args") or {})
        for key, value in candidate_metadata(candidate).items():
            state.metadata[key] = value
        state.note_finish(candidate.get("finishReason"))

    def decode_models(self, response: WireResponse) -> List[ModelInfo]:
        """Decode ``{"models": [{"name": "models/…", "displayName", "inputTokenLimit"}]}``."""
        self.raise_for_status(response)
        body = self.load_json(response)
        items = body.get("models") if isinstance(body, Mapping) else None
        if not isinstance(items, list):
            raise self.format_error("model listing has no 'models' array")
        models: List[ModelInfo] = []
        for item in items:
            if not isinstance(item, Mapping) or not item.get("name"):
                continue
            model_id = str(item["name"]).removeprefix("models/")
            limit = item.get("inputTokenLimit")
            models.append(
                ModelInfo(
                    id=model_id,
                    name=str(item.get("displayName") or model_id),
                    vendor=self.vendor,
                    context_length=int(limit) if isinstance(limit, int) else None,
                )
            )
        return models


__all__ = ["GeminiAdapter"]
