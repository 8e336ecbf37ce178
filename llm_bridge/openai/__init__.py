"""OpenAI (Responses API) vendor adapter."""

from .adapter import OpenAIAdapter

__all__ = ["OpenAIAdapter"]
