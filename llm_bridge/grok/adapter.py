"""Grok adapter (xAI, OpenAI-compatible Chat Completions).

xAI serves the Chat Completions protocol at ``https://api.x.ai/v1``; all
encoding and stream decoding comes from :class:`ChatCompletionsAdapter`.
"""

from __future__ import annotations

from ..base.openai_style_parts import ChatCompletionsAdapter
from ..config.defaults import GROK_DEFAULT_BASE_URL


class GrokAdapter(ChatCompletionsAdapter):
    vendor = "grok"
    default_base_url = GROK_DEFAULT_BASE_URL


__all__ = ["GrokAdapter"]
