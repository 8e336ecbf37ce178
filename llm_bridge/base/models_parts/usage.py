"""
Token usage accounting.

``total_tokens`` is derived from the two counters rather than trusted from the
vendor, so the invariant ``total = prompt + completion`` always holds.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


def _non_negative(value: Any) -> int:
    try:
        number = int(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(number, 0)


@dataclass(frozen=True)
class Usage:
    """Prompt/completion token counts for a single turn."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "prompt_tokens", _non_negative(self.prompt_tokens))
        object.__setattr__(self, "completion_tokens", _non_negative(self.completion_tokens))
        object.__setattr__(self, "total_tokens", self.prompt_tokens + self.completion_tokens)

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


__all__ = ["Usage"]
