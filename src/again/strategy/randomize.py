r"""Randomization of retry delays.

Randomizing delays spreads the retries of many concurrent callers that
share the same strategy, so they do not all hit a recovering service at
the same moment.
"""

from __future__ import annotations

__all__ = ["RandomizedStrategy", "randomize_delay", "randomize_strategy"]

import random
from typing import TYPE_CHECKING, Protocol

from again.strategy.base import BaseStrategy
from again.utils.numbers import match_delay_type
from again.utils.validation import validate_rand_factor

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class RandomSource(Protocol):
    def random(self) -> float: ...


def randomize_delay(rand_factor: float, delay: float, rng: RandomSource | None = None) -> int:
    """Return a random integral delay around ``delay``.

    The delay is drawn from ``[delay - delta, delay + delta]`` where
    ``delta = delay * rand_factor``, then truncated to an integer. The
    range is widened by one before truncation so that every integer in
    the range has the same probability, e.g.
    ``randomize_delay(0.8, 1)`` returns 0, 1 or 2. With a ``Decimal``
    delay the computation is carried out in ``Decimal``.

    Args:
        rand_factor: The randomization factor, in the open interval (0, 1).
        delay: The delay to randomize.
        rng: Optional source of randomness with a ``random()`` method.
            Defaults to the ``random`` module.

    Returns:
        The randomized delay. It is never negative.

    Raises:
        ValueError: If ``rand_factor`` is not strictly between 0 and 1.

    Example:
        ```pycon
        >>> from random import Random
        >>> from again.strategy import randomize_delay
        >>> 500 <= randomize_delay(0.5, 1000, rng=Random(42)) <= 1501
        True

        ```
    """
    validate_rand_factor(rand_factor)
    if rng is None:
        rng = random
    delta = delay * match_delay_type(rand_factor, delay)
    min_delay = delay - delta
    max_delay = delay + delta
    draw = match_delay_type(rng.random(), delay)
    return int(min_delay + draw * (max_delay - min_delay + 1))


class RandomizedStrategy(BaseStrategy):
    """Scale every delay of a strategy by a random factor in
    ``[1 - rand_factor, 1 + rand_factor]``.

    Fresh random values are drawn on each traversal.

    Args:
        rand_factor: The randomization factor, in the open interval (0, 1).
        strategy: The strategy to randomize.
        rng: Optional source of randomness with a ``random()`` method.
    """

    def __init__(
        self,
        rand_factor: float,
        strategy: Iterable[float],
        rng: RandomSource | None = None,
    ) -> None:
        validate_rand_factor(rand_factor)
        self.rand_factor = rand_factor
        self.strategy = strategy
        self.rng = rng

    def __iter__(self) -> Iterator[int]:
        for delay in self.strategy:
            yield randomize_delay(self.rand_factor, delay, rng=self.rng)


def randomize_strategy(
    rand_factor: float,
    strategy: Iterable[float],
    rng: RandomSource | None = None,
) -> RandomizedStrategy:
    """Return ``strategy`` with every delay randomized by
    ``randomize_delay``.

    Raises:
        ValueError: If ``rand_factor`` is not strictly between 0 and 1.

    Example:
        ```pycon
        >>> from again.strategy import constant_strategy, max_retries, randomize_strategy
        >>> delays = list(randomize_strategy(0.1, max_retries(3, constant_strategy(1000))))
        >>> all(900 <= delay <= 1101 for delay in delays)
        True

        ```
    """
    return RandomizedStrategy(rand_factor, strategy, rng=rng)
