"""
Tests for structured logging
"""
import json
import logging

from dc_agent.core.logging_config import ContextualFormatter, LoggingConfig


def _record(msg="hello", **extra):
    record = logging.LogRecord("dc_agent.test", logging.INFO, __file__, 10, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extra_fields():
    line = ContextualFormatter().format(_record(tables=["a", "b"], reason=object()))
    data = json.loads(line)
    assert data["message"] == "hello"
    assert data["level"] == "INFO"
    assert data["logger"] == "dc_agent.test"
    assert data["tables"] == ["a", "b"]
    assert isinstance(data["reason"], str)


def test_request_context_is_merged_and_cleared():
    LoggingConfig.set_context(request_id="req-1", path="/config")
    try:
        data = json.loads(ContextualFormatter().format(_record()))
        assert data["request_id"] == "req-1"
        assert data["path"] == "/config"
    finally:
        LoggingConfig.clear_context()

    assert LoggingConfig.get_context() == {}
    assert "request_id" not in json.loads(ContextualFormatter().format(_record()))


def test_level_counters():
    LoggingConfig.configure()
    LoggingConfig.reset_metrics()
    LoggingConfig.get_logger("dc_agent.test").warning("counted")
    assert LoggingConfig.get_metrics()["WARNING"] == 1
