"""
Specialized error types layered on :class:`ProviderError`.

Each subclass shares the dataclass constructor of ``ProviderError`` so call
sites stay uniform (``code``, ``message``, ``provider`` first). The classes
exist so callers can ``except`` on the failure category without inspecting
codes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .provider_error import ProviderError


class ConfigurationError(ProviderError):
    """Missing credentials or an invalid canonical request. Never retried."""


class TransportError(ProviderError):
    """Connection-level failure (reset, DNS, timeout). Retryable per policy."""


class ResponseFormatError(ProviderError):
    """The vendor replied with a shape no adapter rule recognizes.

    Retrying cannot fix a structural mismatch, so the transport never retries
    these.
    """


class MissingContinuationState(ProviderError):
    """Stateful continuation was attempted without a continuation token."""


@dataclass
class TurnFailedError(ProviderError):
    """A conversation turn could not be finalized.

    Attributes:
        cause: The underlying transport, vendor or decoding error.
    """

    cause: Optional[Exception] = None


@dataclass
class NoContentError(TurnFailedError):
    """The turn failed before any byte reached the caller's chunk sink."""


@dataclass
class PartialContentError(TurnFailedError):
    """The turn failed after content was already streamed to the sink.

    The streamed bytes have been observed downstream (for example rendered in
    a UI) and cannot be silently discarded; callers decide whether to keep or
    retract them.

    Attributes:
        partial_content: Raw bytes that were delivered to the sink.
        bytes_streamed: Number of bytes delivered across all attempts.
    """

    partial_content: bytes = field(default=b"", repr=False)
    bytes_streamed: int = 0


class ToolExtractionWarning(UserWarning):
    """A malformed tool-call fragment degraded to empty arguments."""


__all__ = [
    "ConfigurationError",
    "TransportError",
    "ResponseFormatError",
    "MissingContinuationState",
    "TurnFailedError",
    "NoContentError",
    "PartialContentError",
    "ToolExtractionWarning",
]
