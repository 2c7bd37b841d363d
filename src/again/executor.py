r"""Retry executor driving an operation through a retry strategy.

This module implements the execution engine: it runs a zero-argument
operation, classifies failures with the exception predicate, reports
every attempt to the callback, sleeps between attempts and stops when
the operation succeeds, a failure is not retryable, the callback returns
``FORCE_FAIL`` or the strategy is exhausted.

Example:
    ```pycon
    >>> from again import with_retries
    >>> from again.strategy import constant_strategy, max_retries
    >>> with_retries(max_retries(3, constant_strategy(0)), lambda: 42)
    42

    ```
"""

from __future__ import annotations

__all__ = ["RetryExecutor", "retry", "with_retries"]

import functools
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, TypeVar

from again.callbacks import AttemptReport, Status, invoke_callback
from again.config import normalize_options
from again.utils.sleep import sleep_ms
from again.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from again.config import RetryOptions

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes operations with automatic retry logic.

    The executor only holds its options, so one instance can run any
    number of operations, including from several threads at once. The
    attempt state lives in ``execute``.

    Args:
        options: Retry options, a mapping of option names, or a bare
            strategy.
        single_use: Whether the executor runs a single operation. A
            reusable executor rejects one-shot iterators such as
            generators, which would be exhausted by the first execution.

    Raises:
        TypeError: If the strategy is a one-shot iterator and
            ``single_use`` is false.

    Attributes:
        options: The normalized retry options.

    Example:
        ```pycon
        >>> from again import RetryExecutor
        >>> executor = RetryExecutor([0, 0])
        >>> calls = []
        >>> def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("unavailable")
        ...     return "done"
        ...
        >>> executor.execute(flaky)
        'done'
        >>> len(calls)
        3

        ```
    """

    def __init__(
        self,
        options: RetryOptions | Mapping[str, Any] | Iterable[float],
        *,
        single_use: bool = False,
    ) -> None:
        self.options = normalize_options(options)
        if not single_use and isinstance(self.options.strategy, Iterator):
            msg = (
                "strategy is a one-shot iterator and would be exhausted after the first "
                "execution, pass a re-iterable strategy such as a list or a BaseStrategy"
            )
            raise TypeError(msg)

    def _is_retryable(self, exc: Exception) -> bool:
        predicate = self.options.exception_predicate
        return predicate is None or bool(predicate(exc))

    def _report(
        self, attempts: int, slept: float, status: Status, exc: Exception | None
    ) -> AttemptReport:
        return AttemptReport(
            attempts=attempts,
            slept=slept,
            status=status,
            exception=exc,
            user_context=self.options.user_context,
        )

    def execute(self, operation: Callable[[], T]) -> T:
        """Execute the operation, retrying it according to the strategy.

        Args:
            operation: Zero-argument callable to run.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            Exception: The exception raised by the last attempt, unchanged,
                when it is not retryable, when the callback returns
                ``FORCE_FAIL`` or when the strategy is exhausted.
                Exceptions raised by the callback or the predicate
                propagate as well.
            ValueError: If the strategy produces a negative delay. The
                failure of the last attempt is chained as its cause.
        """
        callback = self.options.callback
        sleep = self.options.sleep or sleep_ms
        delays = iter(self.options.strategy)
        attempts = 1
        slept = 0

        while True:
            try:
                result = operation()
            except Exception as exc:
                if not self._is_retryable(exc):
                    logger.debug(
                        f"Attempt {attempts} failed with non-retryable {type(exc).__name__}"
                    )
                    raise

                delay = next(delays, None)
                if delay is None:
                    log_structured(
                        logger,
                        logging.DEBUG,
                        f"Attempt {attempts} failed with {type(exc).__name__}, "
                        f"strategy exhausted after sleeping {slept}",
                        attempts=attempts,
                        slept=slept,
                        status=Status.FAILURE.value,
                    )
                    invoke_callback(callback, self._report(attempts, slept, Status.FAILURE, exc))
                    raise

                if delay < 0:
                    msg = f"strategy produced a negative delay: {delay}"
                    raise ValueError(msg) from exc

                if invoke_callback(callback, self._report(attempts, slept, Status.RETRY, exc)):
                    logger.debug(f"Retries aborted by callback after attempt {attempts}")
                    raise

                log_structured(
                    logger,
                    logging.DEBUG,
                    f"Attempt {attempts} failed with {type(exc).__name__}, retrying in {delay}",
                    attempts=attempts,
                    slept=slept,
                    status=Status.RETRY.value,
                    delay=delay,
                )
                sleep(delay)
                attempts += 1
                slept += delay
            else:
                if attempts > 1:
                    logger.debug(f"Operation succeeded after {attempts} attempts")
                invoke_callback(callback, self._report(attempts, slept, Status.SUCCESS, None))
                return result


def with_retries(
    options: RetryOptions | Mapping[str, Any] | Iterable[float],
    operation: Callable[[], T],
) -> T:
    """Run ``operation``, retrying it on failure.

    The total number of attempts is at most the number of delays in the
    strategy plus one. One-shot iterators such as generators are accepted
    as strategies since the strategy is traversed once.

    Args:
        options: Retry options, a mapping of option names, or a bare
            strategy such as ``[100, 100, 100]``.
        operation: Zero-argument callable to run.

    Returns:
        The value returned by the first successful attempt.

    Raises:
        Exception: The failure of the last attempt, unchanged.

    Example:
        ```pycon
        >>> from again import with_retries
        >>> with_retries([], lambda: "ok")
        'ok'

        ```
    """
    return RetryExecutor(options, single_use=True).execute(operation)


def retry(
    options: RetryOptions | Mapping[str, Any] | Iterable[float],
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator retrying every call of the decorated function.

    Args:
        options: Retry options, a mapping of option names, or a bare
            strategy.

    Returns:
        A decorator. Each call of the decorated function runs through
        one shared ``RetryExecutor`` with the call arguments bound.

    Raises:
        TypeError: If the strategy is a one-shot iterator. Every call
            of the decorated function traverses the strategy again.

    Example:
        ```pycon
        >>> from again import retry
        >>> @retry([0, 0])
        ... def add(a, b):
        ...     return a + b
        ...
        >>> add(1, 2)
        3

        ```
    """
    executor = RetryExecutor(options)

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return executor.execute(functools.partial(func, *args, **kwargs))

        return wrapper

    return decorator
