import json
import logging

from unittest.mock import Mock

from poolstat.zpool.infrastructure.logging.structured_logger import (
    StructuredFormatter,
    StructuredLogger,
    ContextLogger,
    configure_logging
)


def test_formatter_emits_json_with_extras():
    record = logging.LogRecord("poolstat.test", logging.INFO, __file__, 10, "parsed %s", ("tank",), None)
    record.pool = "tank"
    record.devices = {"unserializable": object()}

    entry = json.loads(StructuredFormatter().format(record))

    assert entry["message"] == "parsed tank"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "poolstat.test"
    assert entry["pool"] == "tank"
    assert isinstance(entry["devices"], str)


def test_structured_logger_respects_level():
    logger = StructuredLogger("poolstat.test.level", level="WARNING")
    logger.logger.handle = Mock()

    logger.info("ignored")
    logger.warning("kept", {"pool": "tank"})

    logger.logger.handle.assert_called_once()
    record = logger.logger.handle.call_args.args[0]
    assert record.pool == "tank"
    assert record.getMessage() == "kept"


def test_context_logger_merges_context():
    logger = ContextLogger("poolstat.test.context", context={"service": "pool_status_service"})
    logger.logger.handle = Mock()

    logger.add_context("request", 7)
    logger.info("hello", {"pool": "tank"})
    logger.remove_context("request")
    logger.info("again")

    first, second = [c.args[0] for c in logger.logger.handle.call_args_list]
    assert first.service == "pool_status_service"
    assert first.request == 7
    assert first.pool == "tank"
    assert not hasattr(second, "request")


def test_configure_logging_is_idempotent():
    logger = configure_logging("DEBUG", name="poolstat.test.configure")
    configure_logging("DEBUG", name="poolstat.test.configure")

    formatters = [h for h in logger.handlers if isinstance(h.formatter, StructuredFormatter)]
    assert len(formatters) == 1
    assert logger.level == logging.DEBUG


def test_exception_attaches_traceback():
    logger = StructuredLogger("poolstat.test.exception")
    logger.logger.handle = Mock()

    try:
        raise ValueError("bad counter")
    except ValueError:
        logger.exception("parse failed")

    record = logger.logger.handle.call_args.args[0]
    assert record.levelno == logging.ERROR
    assert record.exc_info[0] is ValueError
    assert "bad counter" in json.loads(StructuredFormatter().format(record))["exception"]
