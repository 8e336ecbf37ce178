"""Index-keyed accumulation of streamed tool-call fragments.

Vendors that stream function arguments as text deltas (chat-completions style
``tool_calls[i].function.arguments``, Anthropic ``input_json_delta``) only
identify a call by its position until the stream ends. The accumulator is
created at stream start, fed while events are folded, finalized exactly once
and then discarded.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..diagnostics import DiagnosticsSink, null_diagnostics
from ..errors import ToolExtractionWarning
from ..models import ToolCall
from .ids import generate_tool_call_id


@dataclass
class _PendingCall:
    id: Optional[str] = None
    name: str = ""
    arguments_fragments: List[str] = field(default_factory=list)
    # Arguments delivered whole (Anthropic ``input`` on the start block).
    initial_arguments: Optional[str] = None


class ToolCallAccumulator:
    """Mutable per-stream state mapping an index to a pending tool call.

    Parameters:
        diagnostics: Sink notified with ``tools.arguments_degraded`` whenever
            argument text fails to parse and falls back to ``{}``.
    """

    def __init__(self, diagnostics: Optional[DiagnosticsSink] = None) -> None:
        self._pending: Dict[int, _PendingCall] = {}
        self._diagnostics = diagnostics or null_diagnostics
        self._result: Optional[Tuple[List[ToolCall], List[ToolExtractionWarning]]] = None

    @property
    def finalized(self) -> bool:
        return self._result is not None

    def __len__(self) -> int:
        return len(self._pending)

    def start(
        self,
        index: int,
        *,
        call_id: Optional[str] = None,
        name: Optional[str] = None,
        arguments: Optional[str] = None,
    ) -> None:
        """Open (or update) the call at ``index``."""
        self._ensure_open()
        pending = self._pending.setdefault(index, _PendingCall())
        if call_id:
            pending.id = call_id
        if name:
            pending.name = name
        if arguments:
            pending.initial_arguments = arguments

    def append(
        self,
        index: int,
        fragment: Optional[str],
        *,
        call_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        """Append an argument fragment; ``call_id``/``name`` fill in when first seen."""
        self.start(index, call_id=call_id, name=name)
        if fragment:
            self._pending[index].arguments_fragments.append(fragment)

    def finalize(self) -> Tuple[List[ToolCall], List[ToolExtractionWarning]]:
        """Concatenate fragments, parse them, and return calls in index order.

        Text that parses as a JSON object is kept byte-for-byte. Malformed
        argument text degrades to ``"{}"`` and yields a
        :class:`ToolExtractionWarning`. Repeated calls return the first result.
        """
        if self._result is not None:
            return self._result
        calls: List[ToolCall] = []
        warnings: List[ToolExtractionWarning] = []
        for index in sorted(self._pending):
            pending = self._pending[index]
            if not pending.name:
                continue
            text = "".join(pending.arguments_fragments) or pending.initial_arguments or ""
            arguments, warning = self._normalize_arguments(pending.name, index, text)
            if warning is not None:
                warnings.append(warning)
            calls.append(
                ToolCall(
                    id=pending.id or generate_tool_call_id(pending.name),
                    name=pending.name,
                    arguments=arguments,
                )
            )
        self._result = (calls, warnings)
        self._pending.clear()
        return self._result

    def _normalize_arguments(
        self, name: str, index: int, text: str
    ) -> Tuple[str, Optional[ToolExtractionWarning]]:
        if not text.strip():
            return "{}", None
        try:
            value = json.loads(text)
        except ValueError as exc:
            problem = f"invalid JSON arguments ({exc})"
        else:
            if isinstance(value, dict):
                return text, None
            problem = f"arguments are {type(value).__name__}, not an object"
        warning = ToolExtractionWarning(f"tool call {name!r} at index {index}: {problem}; using empty arguments")
        self._diagnostics(
            "tools.arguments_degraded",
            {"tool_name": name, "index": index, "error": problem, "fragment_preview": text[:200]},
        )
        return "{}", warning

    def _ensure_open(self) -> None:
        if self._result is not None:
            raise RuntimeError("ToolCallAccumulator already finalized")


__all__ = ["ToolCallAccumulator"]
