"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llm_bridge.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.taxonomy import (
    ConfigurationError,
    MissingContinuationState,
    NoContentError,
    PartialContentError,
    ResponseFormatError,
    ToolExtractionWarning,
    TransportError,
    TurnFailedError,
)
from .errors_parts.classification import classify_exception, code_for_status, is_transient

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "ResponseFormatError",
    "MissingContinuationState",
    "TurnFailedError",
    "NoContentError",
    "PartialContentError",
    "ToolExtractionWarning",
    "classify_exception",
    "code_for_status",
    "is_transient",
]
