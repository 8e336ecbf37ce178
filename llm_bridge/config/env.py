"""llm_bridge.config.env
=====================

Centralized environment variable mapping and helpers for vendor credentials.

Design Notes
------------
- Canonical mapping is defined in ``ENV_MAP``. Some vendors accept several
  variable names; list those in ``ENV_ALIASES`` with the canonical name first
  to establish precedence.
- Helpers never raise on unknown vendors or unset variables; callers decide
  how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical vendor → env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "grok": "GROK_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}


# Vendor → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "grok": ("GROK_API_KEY", "XAI_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_name(vendor: str) -> Optional[str]:
    """Return the canonical environment variable name for a vendor."""
    return ENV_MAP.get(vendor.lower()) if vendor else None


def get_env_var_candidates(vendor: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a vendor, canonical first."""
    v = (vendor or "").lower()
    canonical = ENV_MAP.get(v)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(v, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(vendor: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a vendor from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty candidate, or
        ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(vendor):
        if val := os.environ.get(name):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
