"""Streaming fold helpers."""

from .stream_state import StreamState

__all__ = ["StreamState"]
