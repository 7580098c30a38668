"""Logging setup for the HTTP handler.

`configure_logging` is called once by the composition root. INFO and below go
to stdout, WARNING and above to stderr, and every record carries the id of
the dispatch that emitted it. Library code only emits through `LoggingPort`
or module loggers and never changes global logging itself.
"""

from __future__ import annotations

import logging
import sys
import contextvars

# Id of the dispatch being processed (set per call by HttpHandler)
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default="-"
)

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s %(request_id)s: %(message)s"


def coerce_level(level: int | str | None) -> int:
    """Map a level name or number to a logging level, INFO when unknown."""
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(str(level).upper().strip())
    return numeric if isinstance(numeric, int) else logging.INFO


class _RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class _LevelRangeFilter(logging.Filter):
    """Pass records whose level lies within [low, high]."""

    def __init__(self, low: int, high: int):
        super().__init__()
        self.low = low
        self.high = high

    def filter(self, record: logging.LogRecord) -> bool:
        return self.low <= record.levelno <= self.high


def _stream_handler(stream, low: int, high: int) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(low)
    handler.addFilter(_LevelRangeFilter(low, high))
    handler.addFilter(_RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def configure_logging(level: int | str | None = None, quiet_aiohttp: bool = True) -> None:
    """Install the stdout/stderr sinks on the root logger.

    Existing root handlers are removed first, so calling this twice does not
    duplicate output.
    """
    numeric_level = coerce_level(level)

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    root.addHandler(_stream_handler(sys.stdout, logging.DEBUG, logging.INFO))
    root.addHandler(_stream_handler(sys.stderr, logging.WARNING, logging.CRITICAL))

    if quiet_aiohttp:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)

    logging.getLogger("http_handler").debug(
        "Logging configured level=%s quiet_aiohttp=%s", numeric_level, quiet_aiohttp
    )
