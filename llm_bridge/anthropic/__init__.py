"""Anthropic (Messages API) vendor adapter."""

from .adapter import AnthropicAdapter

__all__ = ["AnthropicAdapter"]
