"""Cancellation error type.

Defines the public ``CancelledError`` raised when a caller abandons an
in-flight request. Kept isolated to satisfy the one-class-per-file layout.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinct from transport failures so the retry loop never retries it and
    the engine can report it without a vendor error code.
    """


__all__ = ["CancelledError"]
