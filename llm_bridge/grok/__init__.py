"""Grok (xAI) vendor adapter."""

from .adapter import GrokAdapter

__all__ = ["GrokAdapter"]
