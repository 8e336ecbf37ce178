"""Typed settings record returned by the settings provider.

Purpose
-------
Capture the credentials and endpoint overrides a vendor adapter needs to
encode a request. This is the only shape the engine requires from the host's
settings storage (``get(vendor) -> {api_key, base_url?, organization?}``).

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and `.model_dump()` convenience.

Failure modes & side effects
----------------------------
- Pure data container: no I/O side effects. Validation errors may be raised by
  Pydantic if inputs are of incorrect types.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field


class VendorSettings(BaseModel):
    """Credentials and endpoint configuration for one vendor.

    Attributes
    ----------
    api_key:
        API key or token. Adapters raise ``ConfigurationError`` when empty.
    base_url:
        Optional override for the API base URL (proxies, gateways).
    organization:
        Optional organization/tenant hint (sent by OpenAI as a header).
    headers:
        Extra static HTTP headers added to every request.
    extra:
        Free-form vendor-specific configuration (for example the OpenRouter
        ``site_url``/``app_name`` attribution pair or the ``retry`` policy).
    """

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    organization: Optional[str] = None
    headers: Mapping[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)

    def base_url_or(self, default: str) -> str:
        """Return the configured base URL without a trailing slash."""
        return (self.base_url or default).rstrip("/")


__all__ = ["VendorSettings"]
