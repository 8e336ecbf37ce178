"""
Vendor-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``llm_bridge.base.models_parts``.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.tool_call import ToolCall
from .models_parts.tool_spec import ToolChoice, ToolSpec, specific_tool_name
from .models_parts.message import Message, Role
from .models_parts.usage import Usage
from .models_parts.canonical_request import CanonicalRequest
from .models_parts.canonical_response import CanonicalResponse
from .models_parts.wire_request import WireRequest
from .models_parts.wire_response import WireResponse
from .models_parts.model_info import ModelInfo

__all__ = [
    "ContentPart",
    "ContentPartType",
    "ToolCall",
    "ToolSpec",
    "ToolChoice",
    "specific_tool_name",
    "Message",
    "Role",
    "Usage",
    "CanonicalRequest",
    "CanonicalResponse",
    "WireRequest",
    "WireResponse",
    "ModelInfo",
]
