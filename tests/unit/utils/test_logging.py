"""Unit tests for logging.py

Test coverage includes:

1. JsonFormatter
   - Ensures records render as JSON with timestamp, level, logger and message.
   - Ensures `extra` fields are attached.
   - Ensures standard LogRecord attributes stay out of the payload.
   - Ensures exceptions and stack info are rendered.

2. initialize_logging()
   - Ensures the root logger level follows LOG_LEVEL or the explicit argument.
"""

import sys
import json
import logging

import pytest

from ttlshortener.utils.logging import JsonFormatter, initialize_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name='ttlshortener.test',
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='Short link %s created.',
        args=('abc123',),
        exc_info=None,
    )
    record.created = 1760529600.0  # 2025-10-15T12:00:00Z
    record.__dict__.update(extra)
    return record


# -------------------------------
# 1. JsonFormatter
# -------------------------------


def test_json_formatter():
    log = json.loads(JsonFormatter().format(_record()))

    assert log['timestamp'] == '2025-10-15T12:00:00.000Z'
    assert log['level'] == 'INFO'
    assert log['logger'] == 'ttlshortener.test'
    assert log['message'] == 'Short link abc123 created.'


def test_json_formatter_attaches_extra():
    log = json.loads(JsonFormatter().format(_record(shortcode='abc123', clicks=3)))

    assert log['shortcode'] == 'abc123'
    assert log['clicks'] == 3


def test_json_formatter_omits_record_internals():
    log = json.loads(JsonFormatter().format(_record()))

    assert set(log) == {'timestamp', 'level', 'logger', 'message'}


def test_json_formatter_renders_exception_and_stack():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = _record(exc_info=sys.exc_info(), stack_info='Stack (most recent call last):\n  frame')

    log = json.loads(JsonFormatter().format(record))

    assert 'RuntimeError: boom' in log['exception']
    assert log['stack'].endswith('frame')
    assert 'exc_info' not in log


# -------------------------------
# 2. initialize_logging()
# -------------------------------


def test_initialize_logging_defaults_to_info():
    initialize_logging()
    root = logging.getLogger()

    assert root.level == logging.INFO
    assert isinstance(root.handlers[0].formatter, JsonFormatter)


def test_initialize_logging_reads_log_level(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    initialize_logging()
    assert logging.getLogger().level == logging.DEBUG


def test_initialize_logging_explicit_level(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    initialize_logging('warning')
    assert logging.getLogger().level == logging.WARNING
