"""
Raw vendor response handed to adapter ``decode``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class WireResponse:
    """Status, body bytes and headers of a completed HTTP exchange."""

    status: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        """Decode the body as JSON (raises ``ValueError`` when malformed)."""
        return json.loads(self.body.decode("utf-8") if self.body else "null")


__all__ = ["WireResponse"]
