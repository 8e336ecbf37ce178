"""
Structured provider error exception type.

Wraps vendor failures with a normalized `ErrorCode` for consistent handling,
retry logic, and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Vendor key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        retryable: Hint for the transport retry loop (not authoritative).
        raw: Optional original exception for diagnostics.
        status: HTTP status reported by the vendor, when there was one.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None
    status: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        status = f" (HTTP {self.status})" if self.status is not None else ""
        return f"{self.provider}:{self.model or '-'} {self.code.value}{status}: {self.message}"


__all__ = ["ProviderError"]
