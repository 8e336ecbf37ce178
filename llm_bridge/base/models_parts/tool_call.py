"""
Canonical tool call record.

``arguments`` is always JSON text encoding a mapping so that it round-trips
unchanged through vendors that deliver arguments as strings.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class ToolCall:
    """A vendor-reported request to invoke a named function.

    Attributes:
        id: Identifier the tool result must reference.
        name: Function name.
        arguments: JSON-encoded mapping of arguments (``"{}"`` when none).
    """

    id: str
    name: str
    arguments: str = "{}"

    def arguments_dict(self) -> Dict[str, Any]:
        """Return the decoded argument mapping (empty on malformed text)."""
        try:
            value = json.loads(self.arguments or "{}")
        except ValueError:
            return {}
        return value if isinstance(value, dict) else {}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ToolCall"]
