"""Structured logging for the URL shortener Lambdas

IMPORTANT: Call `initialize_logging()` in the lambda handler's `__init__.py` file
before any other logging is done.

Every log line is one JSON object, so CloudWatch Logs Insights can filter on
the `event` codes and `shortcode` the handlers attach through `extra`:

{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "urlshortener.lambdas.redirect_url.app",
    "message": "Redirecting client to original URL. Responding with 302.",
    "shortcode": "abc123",
    "event": "REDIRECT_SUCCESS"
}
"""

import os
import json
import logging
import logging.config
from typing import Any
from datetime import datetime, UTC

from urlshortener.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra`
LOG_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}

# boto3/botocore log each AppConfig and S3 call at INFO/DEBUG
QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')


def _iso_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord and its `extra` fields as a single JSON line"""

    def format(self, record: logging.LogRecord) -> str:
        log: dict[str, Any] = {
            'timestamp': _iso_timestamp(record.created),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        log.update((key, value) for key, value in vars(record).items() if key not in LOG_RECORD_ATTRS)

        # Extras may hold datetimes or exceptions
        return json.dumps(log, default=str)


def logging_config(level: str) -> dict[str, Any]:
    """Build the dictConfig schema: JSON lines on stdout, AWS SDK loggers held at WARNING"""
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'json': {'()': JsonFormatter}},
        'handlers': {
            'stdout': {
                'class': 'logging.StreamHandler',
                'formatter': 'json',
                'stream': 'ext://sys.stdout',
            }
        },
        'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
        'root': {'level': level, 'handlers': ['stdout']},
    }


def initialize_logging() -> None:
    logging.config.dictConfig(logging_config(os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()))
