"""OpenAI-compatible Chat Completions codec (Grok, OpenRouter)."""

from .base import ChatCompletionsAdapter

__all__ = ["ChatCompletionsAdapter"]
