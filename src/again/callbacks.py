r"""Callback types and data structures for observability.

This module provides the report passed to the user callback after every
attempt, the closed set of attempt statuses, and the ``FORCE_FAIL``
sentinel a callback returns to abort the remaining retries.

The callback is invoked exactly once per attempt outcome:
- ``Status.SUCCESS``: the operation returned a value
- ``Status.RETRY``: the operation failed and will be retried
- ``Status.FAILURE``: the operation failed and the strategy is exhausted

Example:
    ```pycon
    >>> from again import with_retries
    >>> from again.callbacks import AttemptReport, Status
    >>> def log_attempt(report: AttemptReport) -> None:
    ...     if report.status is Status.RETRY:
    ...         print(f"retrying after attempt {report.attempts}")
    ...
    >>> with_retries({"strategy": [10], "callback": log_attempt}, lambda: "ok")
    'ok'

    ```
"""

from __future__ import annotations

__all__ = ["FORCE_FAIL", "AttemptReport", "CallbackAction", "Status", "invoke_callback"]

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class Status(Enum):
    """Outcome of a single attempt."""

    SUCCESS = "success"
    RETRY = "retry"
    FAILURE = "failure"


class CallbackAction(Enum):
    """Special values a callback can return to steer the executor."""

    FORCE_FAIL = "force-fail"


FORCE_FAIL = CallbackAction.FORCE_FAIL


@dataclass(frozen=True)
class AttemptReport:
    """Information passed to the callback after each attempt.

    Attributes:
        attempts: The number of times the operation has been executed so
            far (1-indexed).
        slept: The cumulative delay consumed before the current attempt.
            It is 0 on the first attempt.
        status: The outcome of the attempt.
        exception: The exception raised by the attempt, ``None`` on
            success.
        user_context: The opaque value passed in the retry options,
            echoed unchanged.
    """

    attempts: int
    slept: float
    status: Status
    exception: Exception | None = None
    user_context: Any = None


def invoke_callback(
    callback: Callable[[AttemptReport], Any] | None,
    report: AttemptReport,
) -> bool:
    """Invoke the callback if provided.

    Exceptions raised by the callback are not caught.

    Args:
        callback: Optional callback to invoke.
        report: The report describing the attempt.

    Returns:
        ``True`` if the callback returned ``FORCE_FAIL`` for a
        ``RETRY`` report, otherwise ``False``. ``FORCE_FAIL`` returned
        for a ``SUCCESS`` or ``FAILURE`` report is ignored.
    """
    if callback is None:
        return False
    result = callback(report)
    if result is not FORCE_FAIL:
        return False
    if report.status is not Status.RETRY:
        logger.debug(
            f"Ignoring FORCE_FAIL returned for a {report.status.value} report "
            f"after attempt {report.attempts}"
        )
        return False
    logger.debug(f"Callback requested FORCE_FAIL after attempt {report.attempts}")
    return True
