"""Mutable fold state for decoding one streamed response.

Adapters translate each vendor event into calls on :class:`StreamState`;
``finish`` turns the accumulated state into a :class:`CanonicalResponse`. The
state owns the tool-call accumulator for the stream, so nothing leaks across
streams or retries.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union, Mapping

from ..diagnostics import DiagnosticsSink, null_diagnostics
from ..models import CanonicalResponse, ToolCall, Usage
from ..tools import CompletedItemCollector, ToolCallAccumulator, ToolStrategy


class StreamState:
    """Per-stream accumulator of text, usage, metadata and tool calls."""

    def __init__(
        self,
        vendor: str,
        strategy: ToolStrategy,
        diagnostics: Optional[DiagnosticsSink] = None,
    ) -> None:
        self.vendor = vendor
        self.strategy = strategy
        self._diagnostics = diagnostics or null_diagnostics
        self.text_parts: List[str] = []
        self.model = ""
        self.finish_reason = ""
        self.response_id: Optional[str] = None
        self.prompt_tokens: Optional[int] = None
        self.completion_tokens: Optional[int] = None
        self.metadata: Dict[str, Any] = {}
        self.warnings: List[str] = []
        self.accumulator = ToolCallAccumulator(self._diagnostics)
        self.collector = CompletedItemCollector()
        self.completed = False
        self.events_seen = 0

    # text / metadata -------------------------------------------------------
    def add_text(self, text: Optional[str]) -> None:
        if text:
            self.text_parts.append(text)

    def set_usage(self, prompt: Any = None, completion: Any = None) -> None:
        """Record counters; ``None`` keeps the value seen earlier in the stream."""
        if prompt is not None:
            self.prompt_tokens = int(prompt)
        if completion is not None:
            self.completion_tokens = int(completion)

    def note_model(self, model: Optional[str]) -> None:
        if model and not self.model:
            self.model = str(model)

    def note_response_id(self, response_id: Optional[str]) -> None:
        if response_id and not self.response_id:
            self.response_id = str(response_id)

    def note_finish(self, reason: Optional[str]) -> None:
        """Record the finish reason and close index-keyed tool calls."""
        if not reason:
            return
        self.finish_reason = str(reason)
        if self.strategy is ToolStrategy.DELTA_ACCUMULATION:
            self._finalize_accumulator()

    # tool calls ------------------------------------------------------------
    def start_tool(self, index: int, *, call_id: Optional[str], name: Optional[str], arguments: Optional[str] = None) -> None:
        if self._late(index, name):
            return
        self.accumulator.start(index, call_id=call_id, name=name, arguments=arguments)

    def append_tool_fragment(
        self,
        index: int,
        fragment: Optional[str],
        *,
        call_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        if self._late(index, name):
            return
        self.accumulator.append(index, fragment, call_id=call_id, name=name)

    def complete_tool(
        self,
        call_id: Optional[str],
        name: str,
        arguments: Union[str, Mapping[str, Any], None],
        position: Optional[int] = None,
    ) -> ToolCall:
        return self.collector.record(call_id, name, arguments, position)

    def _late(self, index: int, name: Optional[str]) -> bool:
        if not self.accumulator.finalized:
            return False
        self._diagnostics("tools.late_fragment", {"index": index, "tool_name": name})
        return True

    def _finalize_accumulator(self) -> List[ToolCall]:
        first = not self.accumulator.finalized
        calls, warnings = self.accumulator.finalize()
        if first:
            self.warnings.extend(str(w) for w in warnings)
        return calls

    def tool_calls(self) -> List[ToolCall]:
        if self.strategy is ToolStrategy.DELTA_ACCUMULATION:
            return self._finalize_accumulator()
        return self.collector.calls()

    # result ----------------------------------------------------------------
    def finish(self, *, continuation_token: Optional[str] = None, raw: Any = None) -> CanonicalResponse:
        return CanonicalResponse(
            content="".join(self.text_parts),
            usage=Usage(prompt_tokens=self.prompt_tokens or 0, completion_tokens=self.completion_tokens or 0),
            model=self.model,
            finish_reason=self.finish_reason,
            tool_calls=self.tool_calls(),
            continuation_token=continuation_token,
            vendor=self.vendor,
            response_id=self.response_id,
            warnings=list(self.warnings),
            metadata=dict(self.metadata),
            raw=raw,
        )


__all__ = ["StreamState"]
