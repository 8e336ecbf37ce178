"""
Typed content part model for multi-part messages.

A message may carry plain text or an ordered list of typed parts (text,
images, uploaded files). Adapters map each part to their vendor's block shape.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Optional


ContentPartType = Literal[
    "text",   # Plain text content
    "image",  # Image by URL or base64 ``data``
    "file",   # File reference (vendor ``file_id``) or inline base64 ``data``
]


@dataclass
class ContentPart:
    """A single piece of structured message content.

    Attributes:
        type: The semantic kind of the part.
        text: Text for ``"text"`` parts.
        url: Remote location for image parts.
        data: Base64 payload for inline images or files.
        mime_type: Media type of ``data`` (e.g., ``"image/png"``).
        file_id: Identifier of a file previously uploaded to the vendor.
    """

    type: ContentPartType
    text: Optional[str] = None
    url: Optional[str] = None
    data: Optional[str] = None
    mime_type: Optional[str] = None
    file_id: Optional[str] = None

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    def data_url(self) -> Optional[str]:
        """Return ``url`` or a ``data:`` URL built from the inline payload."""
        if self.url:
            return self.url
        if self.data:
            return f"data:{self.mime_type or 'application/octet-stream'};base64,{self.data}"
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary without unset fields."""
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = [
    "ContentPart",
    "ContentPartType",
]
