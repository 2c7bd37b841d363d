r"""Structured logging utilities for machine-readable retry logs.

The executor attaches the attempt state (``attempts``, ``slept``,
``status``, ``delay``) to its log records as ``extra`` fields. The
formatter in this module renders those records as JSON lines, which is
useful when retry events are shipped to a log aggregation system.

Structured output is opt-in: configure a handler with
``StructuredFormatter`` on the ``again`` logger.

Example:
    ```python
    import logging
    from again.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("again")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = ["StructuredFormatter", "log_structured"]

import json
import logging
import time
from typing import Any

# Attributes every LogRecord carries; anything else came from ``extra``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured retry logs.

    Each record becomes one JSON object with the fields ``timestamp``,
    ``level``, ``logger``, ``message``, ``function`` and ``line``, plus
    every field passed through ``extra``. Values that are not JSON
    serializable (e.g. enums or exceptions) are rendered with ``str``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from io import StringIO
        >>> from again.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("again.doctest")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Retrying", extra={"attempts": 2})
        >>> json.loads(stream.getvalue())["attempts"]
        2

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        """Format the record time as ISO 8601 UTC with millisecond
        precision."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured fields.

    Args:
        logger: Logger to use.
        level: Log level (e.g., ``logging.DEBUG``).
        message: Log message.
        **extra: Structured fields attached to the record.

    Example:
        ```pycon
        >>> import logging
        >>> from again.utils.structured_logging import log_structured
        >>> log_structured(logging.getLogger("again"), logging.DEBUG, "Retrying", attempts=1)

        ```
    """
    logger.log(level, message, extra=extra)
