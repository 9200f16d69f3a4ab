import logging

import pytest
import structlog

from core.logging_config import configure_logging, get_logger


@pytest.fixture
def configured_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    configure_logging()
    yield root
    structlog.reset_defaults()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_configure_logging_bridges_stdlib(configured_logging):
    # pytest adds its own capture handlers to the root logger during a test
    bridged = [
        h for h in configured_logging.handlers
        if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    assert len(bridged) == 1


def test_configure_logging_is_idempotent(configured_logging):
    configure_logging()
    bridged = [
        h for h in configured_logging.handlers
        if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    assert len(bridged) == 1


def test_structlog_events_reach_stdlib_handlers(configured_logging):
    records = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    configured_logging.addHandler(_Collect())
    get_logger("tests.logging").info("page_built", page_number=1)
    assert records
    assert records[0].msg["event"] == "page_built"
    assert records[0].msg["page_number"] == 1
