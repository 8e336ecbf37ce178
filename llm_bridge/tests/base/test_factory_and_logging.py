"""Adapter factory lookups and structured logging helpers."""
from __future__ import annotations

import json
import logging

import pytest

from llm_bridge.base.continuation import ContinuationStrategy
from llm_bridge.base.diagnostics import RecordingDiagnostics, logger_diagnostics
from llm_bridge.base.factory import AdapterFactory, UnknownVendorError
from llm_bridge.base.interfaces import VendorAdapter
from llm_bridge.base.log_support import JsonFormatter, LogContext
from llm_bridge.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    configure_logger,
    get_logger,
    normalized_log_event,
)
from llm_bridge.base.tools import ToolStrategy


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def captured():
    handler = _ListHandler()
    base = get_logger(BASE_LOGGER_NAME)
    base.addHandler(handler)
    try:
        yield handler.records
    finally:
        base.removeHandler(handler)


def test_supported_vendors_in_registry_order():
    assert AdapterFactory.supported() == ("openai", "anthropic", "gemini", "grok", "openrouter")


@pytest.mark.parametrize(
    "vendor, tool_strategy, continuation",
    [
        ("openai", ToolStrategy.COMPLETED_ITEM, ContinuationStrategy.STATEFUL_ID),
        ("anthropic", ToolStrategy.DELTA_ACCUMULATION, ContinuationStrategy.HISTORY_REBUILD),
        ("gemini", ToolStrategy.COMPLETED_ITEM, ContinuationStrategy.HISTORY_REBUILD),
        ("grok", ToolStrategy.DELTA_ACCUMULATION, ContinuationStrategy.HISTORY_REBUILD),
        ("openrouter", ToolStrategy.DELTA_ACCUMULATION, ContinuationStrategy.HISTORY_REBUILD),
    ],
)
def test_adapters_declare_strategies(vendor, tool_strategy, continuation):
    adapter = AdapterFactory.create(vendor)
    assert isinstance(adapter, VendorAdapter)
    assert adapter.vendor == vendor
    assert AdapterFactory.tool_strategy(vendor) is tool_strategy
    assert AdapterFactory.continuation_strategy(vendor) is continuation


def test_unknown_vendor_and_bad_arguments():
    with pytest.raises(UnknownVendorError, match="Unknown vendor 'ollama'"):
        AdapterFactory.create("ollama")
    with pytest.raises(UnknownVendorError, match="Invalid arguments"):
        AdapterFactory.create("openai", nonsense=True)


def test_normalized_log_event_has_required_keys(captured):
    logger = get_logger("llm_bridge.tests")
    normalized_log_event(
        logger,
        "transport.attempt",
        LogContext(provider="openai", model="m"),
        phase="request",
        attempt=1,
        emitted=True,
        tokens={"prompt_tokens": 3},
        status=200,
    )
    payload = json.loads(captured[-1].getMessage())
    for key in REQUIRED_NORMALIZED_KEYS:
        if key != "error_code":
            assert key in payload
    assert "error_code" not in payload
    assert payload["event"] == "transport.attempt"
    assert payload["provider"] == "openai"
    assert payload["status"] == 200


def test_json_formatter_hoists_structured_message():
    record = logging.LogRecord("llm_bridge.x", logging.INFO, __file__, 1, '{"event": "e", "phase": "p"}', None, None)
    line = json.loads(JsonFormatter().format(record))
    assert line["event"] == "e"
    assert line["logger"] == "llm_bridge.x"
    assert "msg" not in line


def test_logger_diagnostics_emit_warning(captured):
    sink = logger_diagnostics(ctx=LogContext(provider="anthropic"))
    sink("sse.decode_error", {"error": "Expecting value"})
    record = captured[-1]
    assert record.levelno == logging.WARNING
    assert json.loads(record.getMessage())["event"] == "sse.decode_error"


def test_recording_diagnostics_keeps_order():
    sink = RecordingDiagnostics()
    sink("a", {"x": 1})
    sink("b", {})
    assert sink.events() == ["a", "b"]
    assert sink.records[0] == ("a", {"x": 1})


def test_configure_logger_level_and_file(tmp_path, monkeypatch):
    monkeypatch.delenv("LLM_BRIDGE_LOG_LEVEL", raising=False)
    log_file = tmp_path / "logs" / "bridge.log"
    logger = configure_logger(level="DEBUG", file_path=str(log_file))
    try:
        assert logger.level == logging.DEBUG
        logger.debug('{"event": "probe"}')
        for handler in logger.handlers:
            handler.flush()
        assert '"event": "probe"' in log_file.read_text(encoding="utf-8")
    finally:
        configure_logger(level="INFO", file_path=None)
