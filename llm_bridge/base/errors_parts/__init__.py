"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llm_bridge.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .taxonomy import (
    ConfigurationError,
    MissingContinuationState,
    NoContentError,
    PartialContentError,
    ResponseFormatError,
    ToolExtractionWarning,
    TransportError,
    TurnFailedError,
)
from .classification import classify_exception, code_for_status, is_transient

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
