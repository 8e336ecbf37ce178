"""OpenRouter vendor adapter."""

from .adapter import OpenRouterAdapter

__all__ = ["OpenRouterAdapter"]
