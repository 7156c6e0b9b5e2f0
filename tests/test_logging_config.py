"""Tests for setup_logging and the JSON formatter."""

import io
import json
import logging

import pytest

from tiercache.logging_config import JsonFormatter, setup_logging


@pytest.fixture(autouse=True)
def _restore_logger():
    logger = logging.getLogger("tiercache")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


class TestSetupLogging:

    def test_json_output_includes_extra_fields(self) -> None:
        stream = io.StringIO()
        setup_logging("DEBUG", "json", stream=stream)
        logging.getLogger("tiercache.cache.orchestrator").info(
            "Key promoted to fast tier",
            extra={"cache_key": "A", "access_count": 2},
        )
        record = json.loads(stream.getvalue().strip())
        assert record["message"] == "Key promoted to fast tier"
        assert record["level"] == "INFO"
        assert record["logger"] == "tiercache.cache.orchestrator"
        assert record["cache_key"] == "A"
        assert record["access_count"] == 2

    def test_text_output(self) -> None:
        stream = io.StringIO()
        setup_logging("INFO", "text", stream=stream)
        logging.getLogger("tiercache.test").info("hello")
        line = stream.getvalue()
        assert " - tiercache.test - INFO - hello" in line

    def test_level_filters_records(self) -> None:
        stream = io.StringIO()
        setup_logging("WARNING", "json", stream=stream)
        logging.getLogger("tiercache.test").info("quiet")
        assert stream.getvalue() == ""

    def test_repeated_setup_replaces_handler(self) -> None:
        setup_logging("INFO", "json", stream=io.StringIO())
        logger = setup_logging("INFO", "json", stream=io.StringIO())
        assert len(logger.handlers) == 1


class TestJsonFormatter:

    def test_non_serialisable_extra_is_stringified(self) -> None:
        record = logging.makeLogRecord({
            "msg": "evicted",
            "levelname": "DEBUG",
            "name": "tiercache",
            "evicted_key": ("tuple", 1),
            "obj": object(),
        })
        data = json.loads(JsonFormatter().format(record))
        assert data["evicted_key"] == ["tuple", 1]
        assert data["obj"].startswith("<object object")
