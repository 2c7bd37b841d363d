r"""Abstract base class for retry strategies."""

from __future__ import annotations

__all__ = ["BaseStrategy"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class BaseStrategy(ABC):
    """Abstract base class for retry strategies.

    A retry strategy is a lazily produced, possibly unbounded sequence of
    delays to wait between attempts. Each call to ``iter()`` starts a new
    traversal, so the same strategy object can drive any number of
    executions and yields the same delays every time (randomized
    strategies draw fresh values on each traversal).
    """

    @abstractmethod
    def __iter__(self) -> Iterator[float]:
        """Return a new iterator over the delays of the strategy.

        Returns:
            An iterator yielding the delays in order.
        """
