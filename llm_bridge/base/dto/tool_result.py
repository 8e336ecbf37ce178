"""Tool result DTO returned by the caller's tool execution callback.

The engine never executes tools itself; it only defines the shape it must
receive back before building the next turn.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, field_validator


class ToolResult(BaseModel):
    """Result envelope for a tool invocation.

    Attributes:
        tool_call_id: Id of the ``ToolCall`` this result answers.
        content: Result payload. Mappings and lists are JSON-encoded so the
            value sent to vendors is always text.
        name: Optional tool name (filled from the pending call when omitted).
    """

    tool_call_id: str
    content: str
    name: Optional[str] = None

    @field_validator("content", mode="before")
    @classmethod
    def _stringify(cls, value: Union[str, Dict[str, Any], Any]) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return json.dumps(value, ensure_ascii=False)


__all__ = ["ToolResult"]
