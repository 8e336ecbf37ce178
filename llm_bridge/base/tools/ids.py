"""Tool call id generation for vendors that do not assign ids."""
from __future__ import annotations

import re
import uuid

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


def generate_tool_call_id(name: str) -> str:
    """Return ``"<name>_<12 hex chars>"`` (name sanitized, ``call`` when empty)."""
    stem = _UNSAFE.sub("_", name or "").strip("_") or "call"
    return f"{stem}_{uuid.uuid4().hex[:12]}"


__all__ = ["generate_tool_call_id"]
