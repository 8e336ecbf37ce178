"""Gemini (Generative Language API) vendor adapter."""

from .adapter import GeminiAdapter

__all__ = ["GeminiAdapter"]
