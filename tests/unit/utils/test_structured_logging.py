r"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging
from io import StringIO
from typing import TYPE_CHECKING

import pytest

from again.callbacks import Status
from again.utils.structured_logging import StructuredFormatter, log_structured

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def structured_logger() -> Generator[tuple[logging.Logger, StringIO], None, None]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("again.test_structured")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield logger, stream
    logger.removeHandler(handler)


#########################################
#     Tests for StructuredFormatter     #
#########################################


def test_structured_formatter_basic_log(structured_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = structured_logger
    logger.info("Test message")

    log_data = json.loads(stream.getvalue().strip())
    assert log_data["message"] == "Test message"
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "again.test_structured"
    assert log_data["function"] == "test_structured_formatter_basic_log"
    assert "timestamp" in log_data
    assert "line" in log_data


def test_structured_formatter_excludes_record_attributes(
    structured_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = structured_logger
    logger.info("Plain")

    log_data = json.loads(stream.getvalue().strip())
    assert "args" not in log_data
    assert "msg" not in log_data
    assert "levelno" not in log_data


def test_structured_formatter_extra_fields(
    structured_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = structured_logger
    logger.debug("Retrying", extra={"attempts": 2, "slept": 150})

    log_data = json.loads(stream.getvalue().strip())
    assert log_data["attempts"] == 2
    assert log_data["slept"] == 150


def test_structured_formatter_non_serializable_extra(
    structured_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = structured_logger
    logger.debug("Retrying", extra={"status": Status.RETRY})

    log_data = json.loads(stream.getvalue().strip())
    assert log_data["status"] == "Status.RETRY"


def test_structured_formatter_exception(
    structured_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = structured_logger
    try:
        msg = "boom"
        raise ValueError(msg)
    except ValueError:
        logger.exception("Failed")

    log_data = json.loads(stream.getvalue().strip())
    assert "ValueError: boom" in log_data["exception"]


def test_structured_formatter_timestamp_format() -> None:
    record = logging.LogRecord("again", logging.INFO, __file__, 1, "msg", (), None)
    record.created = 0.0
    record.msecs = 42.0
    assert StructuredFormatter().formatTime(record) == "1970-01-01T00:00:00.042Z"


####################################
#     Tests for log_structured     #
####################################


def test_log_structured(structured_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = structured_logger
    log_structured(logger, logging.DEBUG, "Attempt failed", attempts=3, delay=100)

    log_data = json.loads(stream.getvalue().strip())
    assert log_data["message"] == "Attempt failed"
    assert log_data["level"] == "DEBUG"
    assert log_data["attempts"] == 3
    assert log_data["delay"] == 100


def test_log_structured_respects_level(structured_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = structured_logger
    logger.setLevel(logging.INFO)
    log_structured(logger, logging.DEBUG, "Hidden", attempts=1)
    assert stream.getvalue() == ""
