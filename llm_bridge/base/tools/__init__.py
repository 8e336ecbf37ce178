"""Tool-call extraction (completed-item and delta-accumulation strategies)."""

from .accumulator import ToolCallAccumulator
from .collector import CompletedItemCollector, encode_arguments
from .ids import generate_tool_call_id
from .strategy import ToolStrategy

__all__ = [
    "ToolCallAccumulator",
    "CompletedItemCollector",
    "encode_arguments",
    "generate_tool_call_id",
    "ToolStrategy",
]
