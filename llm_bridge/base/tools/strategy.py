"""Tool-call extraction strategies."""
from __future__ import annotations

from enum import Enum


class ToolStrategy(str, Enum):
    """How a vendor delivers tool calls inside a stream.

    ``COMPLETED_ITEM``: one event carries a whole call (id, name, full
    arguments) once the vendor marks it complete.
    ``DELTA_ACCUMULATION``: argument text arrives as fragments tied to a
    positional index and must be concatenated before parsing.
    """

    COMPLETED_ITEM = "completed_item"
    DELTA_ACCUMULATION = "delta_accumulation"


__all__ = ["ToolStrategy"]
