"""llm_bridge.config.defaults
==========================

Central place for small, stable default values used across the engine. These
defaults can be overridden via environment variables or the external config
file, but provide sensible fallbacks for local development and tests.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# Vendors the engine ships adapters for, in registry order.
SUPPORTED_VENDORS = ("openai", "anthropic", "gemini", "grok", "openrouter")

# OpenAI (Responses API)
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

# Anthropic
ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet-latest"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_API_VERSION = "2023-06-01"
# The Messages API rejects requests without max_tokens.
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096

# Gemini
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

# Grok (xAI)
GROK_DEFAULT_MODEL = "grok-3"
GROK_DEFAULT_BASE_URL = "https://api.x.ai/v1"

# OpenRouter
OPENROUTER_DEFAULT_MODEL = "openrouter/auto"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"


__all__ = [
    "SUPPORTED_VENDORS",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "GEMINI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_BASE_URL",
    "GROK_DEFAULT_MODEL",
    "GROK_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_BASE_URL",
]
