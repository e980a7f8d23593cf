import json
import logging

import pytest
import structlog

from app.core.logging import setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_stdlib_records_share_the_json_renderer(restore_logging):
    setup_logging("INFO", json_logs=True)
    (handler,) = restore_logging.handlers
    record = logging.LogRecord("sqlalchemy.engine", logging.WARNING, __file__, 1, "pool exhausted", None, None)

    line = json.loads(handler.format(record))
    assert line["event"] == "pool exhausted"
    assert line["level"] == "warning"
    assert line["logger"] == "sqlalchemy.engine"
    assert "timestamp" in line


def test_structlog_events_are_rendered_by_the_root_handler(restore_logging, capsys):
    setup_logging("DEBUG", json_logs=True)
    structlog.get_logger("app.test").info("Request approved", tenant_id=3)

    line = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert line["event"] == "Request approved"
    assert line["tenant_id"] == 3
    assert line["level"] == "info"


def test_uvicorn_loggers_propagate_to_root(restore_logging):
    setup_logging("INFO")
    access = logging.getLogger("uvicorn.access")
    assert access.handlers == []
    assert access.propagate is True
    assert restore_logging.level == logging.INFO
