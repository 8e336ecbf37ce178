"""Settings providers backing :class:`SettingsProvider`.

``ConfigSettingsProvider`` reads the layered ``llm_bridge.config`` sources
(defaults, ``PROVIDERS_CONFIG_FILE``, environment, overrides).
``StaticSettingsProvider`` serves an in-memory mapping, which is what host
applications with their own credential store and the tests use.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from ..config import get_provider_config
from .dto import VendorSettings

_TOP_LEVEL_FIELDS = ("api_key", "base_url", "organization", "headers")


def settings_from_mapping(raw: Mapping[str, Any]) -> VendorSettings:
    """Split a flat vendor config mapping into :class:`VendorSettings`.

    Known fields map to attributes; everything else (``model``, ``retry``,
    ``site_url``...) lands in ``extra``.
    """
    values: Dict[str, Any] = {k: raw[k] for k in _TOP_LEVEL_FIELDS if raw.get(k) is not None}
    extra = {k: v for k, v in raw.items() if k not in _TOP_LEVEL_FIELDS}
    extra |= dict(raw.get("extra") or {})
    extra.pop("extra", None)
    return VendorSettings(**values, extra=extra)


class ConfigSettingsProvider:
    """Resolve settings through :func:`get_provider_config` on every call."""

    def __init__(self, overrides: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        self._overrides = {k.lower(): dict(v) for k, v in (overrides or {}).items()}

    def get(self, vendor: str) -> VendorSettings:
        name = (vendor or "").lower().strip()
        return settings_from_mapping(get_provider_config(name, self._overrides.get(name)))


class StaticSettingsProvider:
    """Serve fixed settings per vendor; unknown vendors get empty settings."""

    def __init__(self, mapping: Mapping[str, Union[VendorSettings, Mapping[str, Any]]]) -> None:
        self._settings: Dict[str, VendorSettings] = {}
        for vendor, value in mapping.items():
            self._settings[vendor.lower()] = (
                value if isinstance(value, VendorSettings) else settings_from_mapping(value)
            )

    def get(self, vendor: str) -> VendorSettings:
        return self._settings.get((vendor or "").lower().strip(), VendorSettings())


__all__ = ["ConfigSettingsProvider", "StaticSettingsProvider", "settings_from_mapping"]
