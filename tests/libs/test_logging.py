import logging

from libs.common.logging import CorrelationIdFilter, configure_logging, log_extra, set_correlation_id


def _record() -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)


def test_filter_stamps_current_correlation_id():
    set_correlation_id("scan-1")
    try:
        record = _record()
        assert CorrelationIdFilter().filter(record)
        assert record.correlation_id == "scan-1"
        assert log_extra() == {"correlation_id": "scan-1"}
    finally:
        set_correlation_id(None)


def test_filter_uses_placeholder_outside_scan():
    record = _record()
    CorrelationIdFilter().filter(record)
    assert record.correlation_id == "-"
    assert log_extra() == {}


def test_configure_logging_installs_single_handler():
    root_logger = logging.getLogger()
    saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
    try:
        configure_logging("debug")
        configure_logging("debug")
        assert len(root_logger.handlers) == 1
        assert root_logger.level == logging.DEBUG
    finally:
        root_logger.handlers[:] = saved_handlers
        root_logger.setLevel(saved_level)
