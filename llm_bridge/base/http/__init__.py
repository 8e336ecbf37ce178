"""HTTP client pooling."""

from .client import attempt_timeout, close_all_clients, get_httpx_client

__all__ = ["get_httpx_client", "attempt_timeout", "close_all_clients"]
