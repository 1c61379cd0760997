"""
Logging setup for the mailgroups command line.

Library modules only ever call logging.getLogger(__name__); handlers are
attached once, by the CLI, to the package logger so every module below it
inherits them.

Usage:
    >>> from mailgroups.logger import configure_logging
    >>> configure_logging(level='DEBUG', fmt='json', log_file='logs/groups.jsonl')
"""
import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import List, Optional

PACKAGE_LOGGER = 'mailgroups'

PLAIN_FORMAT = '%(asctime)s %(levelname)-7s [%(msg_id)s] %(name)s: %(message)s'
PLAIN_DATEFMT = '%Y-%m-%dT%H:%M:%S'


class RecordIdFilter(logging.Filter):
    """Tags each record with a short id so related lines can be grepped."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, 'msg_id', None):
            record.msg_id = uuid.uuid4().hex[:8]
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'msg_id': getattr(record, 'msg_id', None),
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _formatter(fmt: str) -> logging.Formatter:
    if fmt == 'json':
        return JSONFormatter()
    return logging.Formatter(fmt=PLAIN_FORMAT, datefmt=PLAIN_DATEFMT)


def configure_logging(
    level: str = 'WARNING',
    fmt: str = 'plain',
    log_file: Optional[str] = None,
    console: bool = True,
    name: str = PACKAGE_LOGGER
) -> logging.Logger:
    """
    Attach console and/or file handlers to the `name` logger.

    Handlers from an earlier call are closed and replaced, so calling this
    twice does not duplicate output. Unknown level names fall back to
    WARNING.

    Args:
        level: Level name, any case
        fmt: 'plain' or 'json'
        log_file: Optional path of a file to append to
        console: Write to stderr, leaving stdout to command output
        name: Logger to configure

    Returns:
        The configured logger
    """
    target = logging.getLogger(name)
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    target.setLevel(numeric_level)

    for old in list(target.handlers):
        target.removeHandler(old)
        old.close()

    handlers: List[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    formatter = _formatter(fmt)
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        handler.addFilter(RecordIdFilter())
        target.addHandler(handler)

    return target
