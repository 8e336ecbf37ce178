"""Continuation manager: builds the next request after tools ran.

Two strategies, chosen per vendor from the adapter registry:

- ``STATEFUL_ID`` (OpenAI Responses): the vendor keeps the conversation.
  The next request carries only the tool result messages and the previous
  response id as ``continuation_token``. A missing id is fatal
  (``MissingContinuationState``); silently resending without it would make
  the vendor answer tool output it has never seen.
- ``HISTORY_REBUILD`` (everyone else): the next request replays the previous
  messages, the assistant turn that requested the tools, and the results.

Tool results naming unknown call ids are passed through; the vendor decides.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..dto import ToolResult
from ..errors import ConfigurationError, ErrorCode, MissingContinuationState
from ..factory import AdapterFactory
from ..models import CanonicalRequest, CanonicalResponse, Message
from .state import ContinuationState
from .strategy import ContinuationStrategy

ToolResultLike = Union[ToolResult, Mapping[str, Any]]


def is_terminal(response: CanonicalResponse) -> bool:
    """Function form of :meth:`CanonicalResponse.is_terminal`."""
    return response.is_terminal()


class ContinuationManager:
    """Derive continuation states and follow-up requests.

    Parameters:
        strategies: Optional explicit ``vendor -> strategy`` map. By default
            the strategy is read from the vendor's adapter class.
    """

    def __init__(self, strategies: Optional[Mapping[str, ContinuationStrategy]] = None) -> None:
        self._strategies = {k.lower(): v for k, v in (strategies or {}).items()}

    def strategy_for(self, vendor: str) -> ContinuationStrategy:
        name = vendor.lower()
        if name in self._strategies:
            return self._strategies[name]
        return AdapterFactory.continuation_strategy(name)

    def state_after_turn(
        self, vendor: str, request: CanonicalRequest, response: CanonicalResponse
    ) -> ContinuationState:
        strategy = self.strategy_for(vendor)
        common = {
            "vendor": vendor.lower(),
            "strategy": strategy,
            "model": request.model,
            "tools": tuple(request.tools),
            "tool_choice": request.tool_choice,
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
            "stream": request.stream,
            "pending_tool_calls": tuple(response.tool_calls),
        }
        if strategy is ContinuationStrategy.STATEFUL_ID:
            return ContinuationState(token=response.continuation_token, history=(), **common)
        assistant = Message(
            role="assistant",
            content=response.content,
            tool_calls=list(response.tool_calls),
        )
        return ContinuationState(token=None, history=tuple(request.messages) + (assistant,), **common)

    def continue_with_tool_results(
        self, state: ContinuationState, tool_results: Iterable[ToolResultLike]
    ) -> CanonicalRequest:
        results = self._validate_results(state, tool_results)
        names = state.pending_names()
        tool_messages = [
            Message(
                role="tool",
                content=r.content,
                tool_call_id=r.tool_call_id,
                name=r.name or names.get(r.tool_call_id),
            )
            for r in results
        ]
        if state.strategy is ContinuationStrategy.STATEFUL_ID:
            if not state.token:
                raise MissingContinuationState(
                    code=ErrorCode.MISSING_STATE,
                    message="stateful continuation requires the previous response id",
                    provider=state.vendor,
                    model=state.model,
                )
            messages: List[Message] = tool_messages
            token: Optional[str] = state.token
        else:
            messages = list(state.history) + tool_messages
            token = None
        return CanonicalRequest(
            model=state.model,
            messages=messages,
            temperature=state.temperature,
            max_tokens=state.max_tokens,
            tools=list(state.tools),
            tool_choice=state.tool_choice,
            stream=state.stream,
            continuation_token=token,
        )

    @staticmethod
    def _validate_results(state: ContinuationState, tool_results: Iterable[ToolResultLike]) -> List[ToolResult]:
        out: List[ToolResult] = []
        for item in tool_results:
            try:
                out.append(item if isinstance(item, ToolResult) else ToolResult.model_validate(dict(item)))
            except (ValidationError, TypeError, ValueError) as exc:
                raise ConfigurationError(
                    code=ErrorCode.VALIDATION,
                    message=f"invalid tool result: {exc}",
                    provider=state.vendor,
                    model=state.model,
                ) from exc
        if not out:
            raise ConfigurationError(
                code=ErrorCode.VALIDATION,
                message="at least one tool result is required to continue",
                provider=state.vendor,
                model=state.model,
            )
        return out


__all__ = ["ContinuationManager", "is_terminal", "ToolResultLike"]
