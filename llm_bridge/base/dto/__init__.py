"""Pydantic DTOs exchanged with external collaborators."""

from .vendor_settings import VendorSettings
from .tool_result import ToolResult

__all__ = ["VendorSettings", "ToolResult"]
