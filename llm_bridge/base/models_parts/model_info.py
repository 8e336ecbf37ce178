"""
Model listing entry.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ModelInfo:
    """Metadata for a model a vendor exposes.

    Attributes:
        id: Identifier to put in ``CanonicalRequest.model``.
        name: Human-friendly display name (falls back to ``id``).
        vendor: Vendor key.
        context_length: Input token limit when the vendor reports one.
    """

    id: str
    name: str
    vendor: str
    context_length: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ModelInfo"]
