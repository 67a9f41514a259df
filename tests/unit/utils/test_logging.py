"""Unit tests for logging initialization in logging.py.

Test coverage includes:

1. JsonFormatter
   - Renders timestamp, level, logger and message as JSON.
   - Attaches `extra` fields and exception tracebacks.

2. initialize_logging()
   - Configures the root logger with the JSON formatter and LOG_LEVEL.
"""

import json
import logging
import sys

from freezegun import freeze_time

from shardshortener.utils.logging import JsonFormatter, initialize_logging


# -------------------------------
# 1. JsonFormatter
# -------------------------------


@freeze_time('2025-10-15 12:00:00')
def test_json_formatter_renders_record_with_extras():
    record = logging.LogRecord('shardshortener.dao.sql.shard_pool', logging.INFO, __file__, 10, 'Connected to shard %s.', (2,), None)
    record.shard = 2
    record.attempt = 1

    log = json.loads(JsonFormatter().format(record))

    assert log == {
        'timestamp': '2025-10-15T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'shardshortener.dao.sql.shard_pool',
        'message': 'Connected to shard 2.',
        'shard': 2,
        'attempt': 1,
    }


@freeze_time('2025-10-15 12:00:00.987654')
def test_json_formatter_truncates_timestamp_to_milliseconds():
    record = logging.LogRecord('test', logging.INFO, __file__, 10, 'Ready.', (), None)

    assert json.loads(JsonFormatter().format(record))['timestamp'] == '2025-10-15T12:00:00.987Z'


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError('shard down')
    except RuntimeError:
        record = logging.LogRecord('test', logging.ERROR, __file__, 10, 'Failed.', (), sys.exc_info())

    log = json.loads(JsonFormatter().format(record))

    assert log['level'] == 'ERROR'
    assert 'RuntimeError: shard down' in log['exception']


# -------------------------------
# 2. initialize_logging()
# -------------------------------


def test_initialize_logging(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    initialize_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)
