"""
Tests for the glassprofile logging system.
"""

import io
import json
import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from glassprofile.exceptions import ConfigurationError
from glassprofile.utils.logging import (
    LogManager,
    StructuredFormatter,
    get_adapter,
    get_logger,
    initialize_logging
)
from glassprofile.utils.logging_config import (
    LoggingPresets,
    configure_from_environment,
    get_logging_config
)


def _make_record(msg="Test message", **extra):
    record = logging.LogRecord(
        name="glassprofile.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """JSON output of the structured formatter."""

    def test_base_fields(self):
        data = json.loads(StructuredFormatter().format(_make_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "glassprofile.test"
        assert data["message"] == "Test message"
        assert data["line"] == 10
        assert data["timestamp"].endswith("Z")

    def test_extra_fields_are_merged(self):
        record = _make_record(extra_fields={"event_type": "negative_duration", "duration_ms": -2})
        data = json.loads(StructuredFormatter().format(record))
        assert data["event_type"] == "negative_duration"
        assert data["duration_ms"] == -2

    def test_scalar_extras_are_included(self):
        data = json.loads(StructuredFormatter().format(_make_record(test_field="test_value")))
        assert data["test_field"] == "test_value"

    def test_exception_block(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys
            record = logging.LogRecord(
                "glassprofile.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        data = json.loads(StructuredFormatter().format(record))
        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "boom"
        assert "Traceback" in data["exception"]["traceback"]


class TestLogManager:
    """Handler configuration of the package logger."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.log_file = Path(self.temp_dir) / "logs" / "test.log"

    def teardown_method(self):
        for handler in logging.getLogger("glassprofile").handlers[:]:
            logging.getLogger("glassprofile").removeHandler(handler)
            handler.close()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_json_file_logging(self):
        manager = LogManager(log_level="DEBUG", log_format="json", log_file=str(self.log_file),
                             stream=io.StringIO())
        assert manager.log_level == logging.DEBUG

        logger = manager.get_logger("glassprofile.test.basic")
        logger.info("Test message", extra={"test_field": "test_value"})

        assert self.log_file.exists()
        with open(self.log_file, 'r') as f:
            log_data = json.loads(f.readline().strip())

        assert log_data["level"] == "INFO"
        assert log_data["logger"] == "glassprofile.test.basic"
        assert log_data["message"] == "Test message"
        assert log_data["test_field"] == "test_value"

    def test_text_format_on_stream(self):
        stream = io.StringIO()
        manager = LogManager(log_level="INFO", log_format="text", stream=stream)
        manager.get_logger("glassprofile.test.text").warning("plain text")
        assert "WARNING" in stream.getvalue()
        assert "plain text" in stream.getvalue()

    def test_level_filters_records(self):
        stream = io.StringIO()
        manager = LogManager(log_level="WARNING", stream=stream)
        logger = manager.get_logger("glassprofile.test.level")
        logger.info("hidden")
        logger.error("shown")
        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_foreign_names_are_nested_under_package(self):
        manager = LogManager(stream=io.StringIO())
        assert manager.get_logger("reports").name == "glassprofile.reports"
        assert manager.get_logger("glassprofile").name == "glassprofile"
        assert manager.get_logger("glassprofile.models").name == "glassprofile.models"

    def test_adapter_binds_fields(self):
        stream = io.StringIO()
        manager = LogManager(log_level="INFO", log_format="json", stream=stream)
        adapter = manager.get_adapter("glassprofile.test.adapter", service="profiler")
        adapter.bind(signature="foo()").info("bound message")

        data = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert data["message"] == "bound message"
        assert data["service"] == "profiler"
        assert data["signature"] == "foo()"


class TestGlobalConfiguration:
    """Module level helpers and presets."""

    def teardown_method(self):
        for handler in logging.getLogger("glassprofile").handlers[:]:
            logging.getLogger("glassprofile").removeHandler(handler)
            handler.close()

    def test_get_logger_initializes_lazily(self):
        logger = get_logger("glassprofile.test.lazy")
        assert logger.name == "glassprofile.test.lazy"
        assert get_logging_config()["status"] == "initialized"

    def test_initialize_logging_returns_singleton(self):
        first = initialize_logging()
        assert initialize_logging(log_level="DEBUG") is first

    def test_force_replaces_manager(self):
        first = initialize_logging()
        second = initialize_logging(log_level="ERROR", force=True)
        assert second is not first
        assert get_logging_config()["log_level"] == logging.ERROR

    def test_get_adapter(self):
        adapter = get_adapter("test.adapter", component="ranking")
        assert adapter.logger.name == "glassprofile.test.adapter"
        assert adapter.extra_fields == {"component": "ranking"}

    def test_presets(self):
        assert LoggingPresets.development().log_level == logging.DEBUG
        assert LoggingPresets.production().log_level == logging.INFO
        testing = LoggingPresets.testing()
        assert testing.log_level == logging.WARNING
        assert testing.log_format == "text"

    def test_configure_from_environment(self, monkeypatch):
        monkeypatch.setenv("GLASSPROFILE_LOG_LEVEL", "error")
        monkeypatch.setenv("GLASSPROFILE_LOG_FORMAT", "text")
        monkeypatch.setenv("GLASSPROFILE_LOG_BACKUP_COUNT", "2")

        manager = configure_from_environment()
        assert manager.log_level == logging.ERROR
        assert manager.log_format == "text"
        assert manager.backup_count == 2

        config = get_logging_config()
        assert config["log_format"] == "text"
        assert config["backup_count"] == 2

    @pytest.mark.parametrize("name,value", [
        ("GLASSPROFILE_LOG_LEVEL", "LOUD"),
        ("GLASSPROFILE_LOG_FORMAT", "xml"),
        ("GLASSPROFILE_LOG_MAX_BYTES", "ten"),
    ])
    def test_configure_from_environment_rejects_bad_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ConfigurationError):
            configure_from_environment()
