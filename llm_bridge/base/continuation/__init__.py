"""Continuation (multi-turn tool calling) support."""

from .strategy import ContinuationStrategy
from .state import ContinuationState
from .manager import ContinuationManager, ToolResultLike, is_terminal

__all__ = [
    "ContinuationStrategy",
    "ContinuationState",
    "ContinuationManager",
    "ToolResultLike",
    "is_terminal",
]
