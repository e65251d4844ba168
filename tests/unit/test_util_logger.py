"""
Structured logger tests - JSON output, context injection, timing helpers.
"""

import json
import logging

import pytest

from util_logger import (
    ComponentType,
    JSONFormatter,
    LogContext,
    LoggerFactory,
    bind_log_context,
    log_duration,
    log_exceptions,
    update_log_context,
)


class TestJSONFormatter:

    def test_one_json_object_per_record(self):
        record = logging.LogRecord("census", logging.INFO, __file__, 1, "ሴት registered", None, None)
        record.custom_dimensions = {"household_id": 7}

        payload = json.loads(JSONFormatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["message"] == "ሴት registered"
        assert payload["customDimensions"] == {"household_id": 7}


class TestLoggerFactory:

    def test_bound_context_becomes_custom_dimensions(self, caplog):
        logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "test_context")

        with caplog.at_level(logging.INFO):
            with bind_log_context(LogContext(request_id="abc123", route="submit_household")):
                logger.info("hello")

        dims = caplog.records[-1].custom_dimensions
        assert dims["request_id"] == "abc123"
        assert dims["route"] == "submit_household"
        assert dims["component_type"] == ComponentType.TRIGGER.value

    def test_context_not_stored_on_logger(self, caplog):
        logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "test_unbound")
        with bind_log_context(LogContext(request_id="first")):
            pass

        with caplog.at_level(logging.INFO):
            logger.info("hello")

        assert "request_id" not in caplog.records[-1].custom_dimensions

    def test_update_adds_household_id(self, caplog):
        logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "test_update")

        with caplog.at_level(logging.INFO):
            with bind_log_context(LogContext(request_id="r1")):
                update_log_context(household_id=17)
                logger.info("inserted")

        assert caplog.records[-1].custom_dimensions["household_id"] == 17
        assert caplog.records[-1].custom_dimensions["request_id"] == "r1"

    def test_update_outside_request_is_noop(self, caplog):
        update_log_context(household_id=17)
        logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "test_update_noop")

        with caplog.at_level(logging.INFO):
            logger.info("idle")

        assert "household_id" not in caplog.records[-1].custom_dimensions

    def test_repeated_creation_keeps_one_handler(self):
        LoggerFactory.create_logger(ComponentType.TRIGGER, "test_handlers")
        logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "test_handlers")

        json_handlers = [h for h in logger.handlers if isinstance(h.formatter, JSONFormatter)]
        assert len(json_handlers) == 1

    def test_debug_mode_lowers_level(self, monkeypatch):
        monkeypatch.setenv("DEBUG_MODE", "true")
        logger = LoggerFactory.create_logger(ComponentType.SERVICE, "test_debug_mode")
        assert logger.level == logging.DEBUG


class TestLogDuration:

    def test_failure_logged_and_reraised(self, caplog):
        logger = logging.getLogger("test.log_duration")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ValueError):
                with log_duration(logger, "member insert", household_id=3):
                    raise ValueError("boom")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.custom_dimensions["outcome"] == "failed"
        assert record.custom_dimensions["household_id"] == 3


class TestLogExceptions:

    def test_reraises(self, caplog):
        logger = logging.getLogger("test.log_exceptions")

        @log_exceptions(logger=logger)
        def explode():
            raise KeyError("missing")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(KeyError):
                explode()

        assert caplog.records[-1].custom_dimensions["exception_type"] == "KeyError"
