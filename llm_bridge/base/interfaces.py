"""Interface facade re-exporting the protocols under ``interfaces_parts``."""

from .interfaces_parts.settings_provider import SettingsProvider
from .interfaces_parts.vendor_adapter import VendorAdapter

__all__ = ["SettingsProvider", "VendorAdapter"]
