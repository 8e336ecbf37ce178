"""Injected diagnostics sink.

Adapters, the SSE parser and the tool extractor stay pure: instead of logging
directly they report non-fatal findings (decode errors, degraded tool
arguments) to a ``DiagnosticsSink`` the caller supplies. The default sink
forwards to :func:`normalized_log_event` on the ``llm_bridge.diagnostics``
logger.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .logging import LogContext, get_logger, normalized_log_event

DiagnosticsSink = Callable[[str, Mapping[str, Any]], None]


def null_diagnostics(event: str, fields: Mapping[str, Any]) -> None:  # noqa: ARG001
    """Discard diagnostics."""
    return None


def logger_diagnostics(
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> DiagnosticsSink:
    """Return a sink that writes each diagnostic as a WARNING log event."""
    log = logger or get_logger("llm_bridge.diagnostics")

    def _sink(event: str, fields: Mapping[str, Any]) -> None:
        normalized_log_event(log, event, ctx, phase="decode", level=logging.WARNING, **dict(fields))

    return _sink


class RecordingDiagnostics:
    """Sink that keeps every diagnostic in memory (tests, batch re-parses)."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, Dict[str, Any]]] = []

    def __call__(self, event: str, fields: Mapping[str, Any]) -> None:
        self.records.append((event, dict(fields)))

    def events(self) -> List[str]:
        return [name for name, _ in self.records]


__all__ = [
    "DiagnosticsSink",
    "null_diagnostics",
    "logger_diagnostics",
    "RecordingDiagnostics",
]
