"""Pytest configuration for the engine test suite.

Keeps every test hermetic: no vendor credentials or config files leak in
from the developer environment, retry backoff never sleeps, and pooled HTTP
clients are closed after the session.
"""

from __future__ import annotations

import time
from contextlib import suppress
from typing import Iterator, List

import pytest

from llm_bridge.base.diagnostics import RecordingDiagnostics
from llm_bridge.config import reset_config_cache

_VENDOR_ENV = (
    "OPENAI",
    "ANTHROPIC",
    "GEMINI",
    "GOOGLE",
    "GROK",
    "XAI",
    "OPENROUTER",
)
_FIELDS = ("API_KEY", "BASE_URL", "MODEL", "ORGANIZATION")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip vendor env vars and point config sources at nothing."""
    for prefix in _VENDOR_ENV:
        for suffix in _FIELDS:
            monkeypatch.delenv(f"{prefix}_{suffix}", raising=False)
    monkeypatch.delenv("PROVIDERS_CONFIG_FILE", raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Record retry backoff delays instead of sleeping."""
    delays: List[float] = []
    monkeypatch.setattr(time, "sleep", delays.append)
    return delays


@pytest.fixture()
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


@pytest.fixture(scope="session", autouse=True)
def close_pooled_clients() -> Iterator[None]:
    yield
    from llm_bridge.base.http import close_all_clients

    with suppress(Exception):  # teardown must not fail tests
        close_all_clients()
