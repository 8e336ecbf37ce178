"""Shared httpx client pool and per-attempt timeouts."""
from __future__ import annotations

import httpx

from llm_bridge.base.http import attempt_timeout, close_all_clients, get_httpx_client
from llm_bridge.base.timeouts import TimeoutConfig, get_timeout_config


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="chat")
    assert c1 is c2


def test_different_purpose_or_base_url_returns_new_instance():
    base = get_httpx_client("https://api.example.com", purpose="chat")
    assert get_httpx_client("https://api.example.com", purpose="stream") is not base
    assert get_httpx_client("https://api.other.com", purpose="chat") is not base


def test_closed_client_is_replaced():
    c1 = get_httpx_client(None, purpose="chat")
    c1.close()
    c2 = get_httpx_client(None, purpose="chat")
    assert c2 is not c1
    assert not c2.is_closed


def test_attempt_timeout_shapes():
    cfg = TimeoutConfig(start_timeout_seconds=5, stream_timeout_seconds=60, http_timeout_seconds=20)
    streaming = attempt_timeout(True, cfg)
    assert isinstance(streaming, httpx.Timeout)
    assert streaming.connect == 5 and streaming.read == 60
    blocking = attempt_timeout(False, cfg)
    assert blocking.connect == 20 and blocking.read == 20


def test_timeout_env_overrides(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_HTTP_SECONDS", "12.5")
    monkeypatch.setenv("PT_TIMEOUT_STREAM_SECONDS", "-1")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 12.5
    assert cfg.stream_timeout_seconds == 120.0
