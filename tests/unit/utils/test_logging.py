"""Unit tests for JSON logging in logging.py.

Test coverage includes:

1. JsonFormatter
   - Standard fields, `extra` fields and exception info are serialized.

2. initialize_logging()
   - Root logger level follows LOG_LEVEL and logs go to a JSON stdout handler.
   - AWS SDK loggers are held at WARNING.
"""

import sys
import json
import logging

import pytest

from urlshortener.constants import ENV
from urlshortener.utils.logging import JsonFormatter, initialize_logging, logging_config


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers


def make_record(msg='Redirecting %s', args=('abc123',), exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord('urlshortener.test', logging.INFO, __file__, 10, msg, args, exc_info)
    record.created = 1767225600.123
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# -------------------------------
# 1. JsonFormatter
# -------------------------------


def test_json_formatter_standard_fields():
    log = json.loads(JsonFormatter().format(make_record()))

    assert log == {
        'timestamp': '2026-01-01T00:00:00.123Z',
        'level': 'INFO',
        'logger': 'urlshortener.test',
        'message': 'Redirecting abc123',
    }


def test_json_formatter_attaches_extra_fields():
    log = json.loads(JsonFormatter().format(make_record(shortcode='abc123', event='REDIRECT_SUCCESS')))

    assert log['shortcode'] == 'abc123'
    assert log['event'] == 'REDIRECT_SUCCESS'


def test_json_formatter_serializes_exceptions_and_unknown_types():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record(exc_info=sys.exc_info(), payload=object())

    log = json.loads(JsonFormatter().format(record))

    assert 'RuntimeError: boom' in log['exception']
    assert log['payload'].startswith('<object object')


# -------------------------------
# 2. initialize_logging()
# -------------------------------


@pytest.mark.parametrize('log_level, expected', [('debug', logging.DEBUG), ('WARNING', logging.WARNING), (None, logging.INFO)])
def test_initialize_logging(monkeypatch, restore_root_logger, log_level, expected):
    if log_level is None:
        monkeypatch.delenv(ENV.App.LOG_LEVEL, raising=False)
    else:
        monkeypatch.setenv(ENV.App.LOG_LEVEL, log_level)

    initialize_logging()

    assert restore_root_logger.level == expected
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in restore_root_logger.handlers)


def test_logging_config_quiets_aws_sdk_loggers():
    config = logging_config('DEBUG')

    assert config['root'] == {'level': 'DEBUG', 'handlers': ['stdout']}
    assert config['loggers']['botocore'] == {'level': 'WARNING'}
    assert config['loggers']['boto3'] == {'level': 'WARNING'}


def test_initialize_logging_quiets_aws_sdk_loggers(monkeypatch, restore_root_logger):
    monkeypatch.setenv(ENV.App.LOG_LEVEL, 'DEBUG')
    botocore_logger = logging.getLogger('botocore')
    level = botocore_logger.level

    try:
        initialize_logging()
        assert botocore_logger.level == logging.WARNING
    finally:
        botocore_logger.setLevel(level)
