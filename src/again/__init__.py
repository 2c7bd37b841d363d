r"""again - Retry fallible operations with composable retry strategies.

This package wraps an arbitrary zero-argument operation so that, when it
raises, it is retried according to a retry strategy: a lazy, possibly
unbounded sequence of delays to wait between attempts.

Key Features:
    - Strategy generators: constant, immediate, additive, multiplicative, stop
    - Strategy manipulators: clamp_delay, max_delay, max_retries, max_duration
    - Randomized strategies to spread retries of concurrent callers
    - Callback invoked after every attempt with a structured report
    - Exception predicate to skip retries of non-retryable failures
    - ``FORCE_FAIL`` sentinel to abort the remaining retries from a callback

Example:
    ```pycon
    >>> from again import with_retries
    >>> from again.strategy import max_retries, multiplicative_strategy, randomize_strategy
    >>> strategy = max_retries(5, randomize_strategy(0.5, multiplicative_strategy(100, 2)))
    >>> with_retries(strategy, lambda: "ok")
    'ok'
    >>> # Options with a callback and an exception predicate
    >>> from again import RetryOptions
    >>> options = RetryOptions(
    ...     strategy=[100, 200],
    ...     callback=print,
    ...     exception_predicate=lambda exc: isinstance(exc, ConnectionError),
    ... )
    >>> with_retries(options, lambda: "ok")
    AttemptReport(attempts=1, slept=0, status=<Status.SUCCESS: 'success'>, exception=None, user_context=None)
    'ok'

    ```
"""

from __future__ import annotations

__all__ = [
    "FORCE_FAIL",
    "AttemptReport",
    "RetryExecutor",
    "RetryOptions",
    "Status",
    "__version__",
    "retry",
    "with_retries",
]

from importlib.metadata import PackageNotFoundError, version

from again.callbacks import FORCE_FAIL, AttemptReport, Status
from again.config import RetryOptions
from again.executor import RetryExecutor, retry, with_retries

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
