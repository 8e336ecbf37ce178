"""SettingsProvider Protocol (single-class module).

Host applications own credential storage; the engine only needs a key-value
lookup per vendor.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..dto import VendorSettings


@runtime_checkable
class SettingsProvider(Protocol):
    """Key-value lookup of vendor credentials and endpoint overrides."""

    def get(self, vendor: str) -> VendorSettings:  # pragma: no cover - interface
        """Return settings for ``vendor`` (``api_key`` may be empty)."""
        ...
