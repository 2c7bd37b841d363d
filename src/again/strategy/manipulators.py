r"""Strategy manipulators.

Manipulators wrap an existing strategy (any iterable of delays, including
plain lists and unbounded package strategies) and produce a new lazy
strategy. The wrapped strategy is never mutated: each traversal of the
result starts a new traversal of the input.

Example:
    ```pycon
    >>> from again.strategy import clamp_delay, max_retries, multiplicative_strategy
    >>> strategy = max_retries(5, clamp_delay(1000, multiplicative_strategy(200, 2)))
    >>> list(strategy)
    [200, 400, 800, 1000, 1000]

    ```
"""

from __future__ import annotations

__all__ = [
    "ClampDelay",
    "MaxDelay",
    "MaxDuration",
    "MaxRetries",
    "clamp_delay",
    "max_delay",
    "max_duration",
    "max_retries",
]

import itertools
from typing import TYPE_CHECKING

from again.strategy.base import BaseStrategy
from again.utils.validation import validate_non_negative

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class ClampDelay(BaseStrategy):
    """Replace every delay larger than ``max_delay`` with ``max_delay``.

    Args:
        max_delay: The largest delay allowed. Must be non-negative.
        strategy: The strategy to clamp.
    """

    def __init__(self, max_delay: float, strategy: Iterable[float]) -> None:
        validate_non_negative("max_delay", max_delay)
        self.max_delay = max_delay
        self.strategy = strategy

    def __iter__(self) -> Iterator[float]:
        for delay in self.strategy:
            yield min(self.max_delay, delay)


class MaxDelay(BaseStrategy):
    """Stop the strategy at the first delay that is not strictly smaller
    than ``max_delay``.

    Args:
        max_delay: The exclusive upper bound on delays. Must be
            non-negative.
        strategy: The strategy to truncate.
    """

    def __init__(self, max_delay: float, strategy: Iterable[float]) -> None:
        validate_non_negative("max_delay", max_delay)
        self.max_delay = max_delay
        self.strategy = strategy

    def __iter__(self) -> Iterator[float]:
        return itertools.takewhile(lambda delay: delay < self.max_delay, self.strategy)


class MaxRetries(BaseStrategy):
    """Keep at most the first ``n`` delays of a strategy.

    Args:
        n: The maximum number of retries. Must be non-negative.
        strategy: The strategy to truncate.
    """

    def __init__(self, n: int, strategy: Iterable[float]) -> None:
        validate_non_negative("n", n)
        self.n = n
        self.strategy = strategy

    def __iter__(self) -> Iterator[float]:
        return itertools.islice(self.strategy, self.n)


class MaxDuration(BaseStrategy):
    """Limit the cumulative delay of a strategy to approximately
    ``timeout``.

    A delay is emitted while the remaining budget (``timeout`` minus the
    delays already emitted) is positive. The delay that crosses the budget
    is still emitted, then the strategy stops. Delays are never rescaled.

    Args:
        timeout: The total delay budget. Must be non-negative.
        strategy: The strategy to truncate.

    Example:
        ```pycon
        >>> from again.strategy import MaxDuration
        >>> list(MaxDuration(1000, [400, 400, 400, 400]))
        [400, 400, 400]
        >>> list(MaxDuration(10000, [0]))
        [0]

        ```
    """

    def __init__(self, timeout: float, strategy: Iterable[float]) -> None:
        validate_non_negative("timeout", timeout)
        self.timeout = timeout
        self.strategy = strategy

    def __iter__(self) -> Iterator[float]:
        remaining = self.timeout
        for delay in self.strategy:
            if remaining <= 0:
                return
            yield delay
            remaining -= delay


def clamp_delay(max_delay: float, strategy: Iterable[float]) -> ClampDelay:
    """Return ``strategy`` with every delay capped at ``max_delay``.

    Args:
        max_delay: The largest delay allowed.
        strategy: The strategy to clamp.

    Returns:
        A strategy of the same length as ``strategy``.

    Raises:
        ValueError: If ``max_delay`` is negative.
    """
    return ClampDelay(max_delay, strategy)


def max_delay(max_delay: float, strategy: Iterable[float]) -> MaxDelay:
    """Return the longest prefix of ``strategy`` whose delays are all
    strictly smaller than ``max_delay``.

    Raises:
        ValueError: If ``max_delay`` is negative.
    """
    return MaxDelay(max_delay, strategy)


def max_retries(n: int, strategy: Iterable[float]) -> MaxRetries:
    """Return at most the first ``n`` delays of ``strategy``.

    Raises:
        ValueError: If ``n`` is negative.
    """
    return MaxRetries(n, strategy)


def max_duration(timeout: float, strategy: Iterable[float]) -> MaxDuration:
    """Return ``strategy`` truncated once its cumulative delay reaches
    ``timeout``.

    Args:
        timeout: The total delay budget.
        strategy: The strategy to truncate.

    Returns:
        The truncated strategy. Its sum exceeds ``timeout`` by at most the
        single delay that crossed the budget.

    Raises:
        ValueError: If ``timeout`` is negative.
    """
    return MaxDuration(timeout, strategy)
