"""OpenRouter adapter (OpenAI-compatible Chat Completions gateway).

Summary:
- Same wire protocol as Grok via :class:`ChatCompletionsAdapter`.
- Optional attribution headers ``HTTP-Referer`` and ``X-Title`` come from
  ``VendorSettings.extra['site_url']`` and ``extra['app_name']``.
- The upstream provider that served the request (``provider`` in the body)
  is surfaced in ``CanonicalResponse.metadata``.
- Streams may interleave ``: OPENROUTER PROCESSING`` comment lines; the SSE
  parser drops them.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from ..base.dto import VendorSettings
from ..base.openai_style_parts import ChatCompletionsAdapter
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL


class OpenRouterAdapter(ChatCompletionsAdapter):
    vendor = "openrouter"
    default_base_url = OPENROUTER_DEFAULT_BASE_URL

    def build_headers(self, settings: VendorSettings) -> Dict[str, str]:
        headers = super().build_headers(settings)
        site_url = settings.extra.get("site_url")
        app_name = settings.extra.get("app_name")
        if site_url:
            headers["HTTP-Referer"] = str(site_url)
        if app_name:
            headers["X-Title"] = str(app_name)
        return headers

    def response_metadata(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        if body.get("provider"):
            return {"provider": body["provider"]}
        return {}


__all__ = ["OpenRouterAdapter"]
