"""Transport layer (HTTP send, streaming, retry)."""

from .http_transport import ChunkSink, HttpErrorMapper, HttpTransport, default_http_error

__all__ = ["HttpTransport", "ChunkSink", "HttpErrorMapper", "default_http_error"]
