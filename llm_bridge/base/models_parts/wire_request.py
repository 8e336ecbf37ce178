"""
Encoded vendor request.

Produced by adapter ``encode`` and consumed by the transport. Holding the
request as plain data keeps adapters free of I/O.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class WireRequest:
    """An HTTP request ready to send.

    Attributes:
        vendor: Vendor key, used for error attribution and logging.
        method: HTTP method.
        url: Absolute URL.
        headers: Request headers (credentials included).
        body: JSON body, or ``None`` for bodiless requests.
        stream: True when the vendor will answer with an SSE stream.
        model: Model name, for error attribution.
    """

    vendor: str
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None
    stream: bool = False
    model: Optional[str] = None

    def redacted_headers(self) -> Dict[str, str]:
        """Return headers safe for logging (credential values masked)."""
        secret = {"authorization", "x-api-key", "x-goog-api-key"}
        return {k: ("***" if k.lower() in secret else v) for k, v in self.headers.items()}


__all__ = ["WireRequest"]
