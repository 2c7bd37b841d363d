r"""Primitive retry strategy generators.

This module provides the building blocks for retry strategies: constant,
immediate, additive and multiplicative delay sequences, and the empty
strategy that disables retries. Generated strategies are unbounded
(except ``stop_strategy``) and are usually truncated with the
manipulators in ``again.strategy.manipulators``.
"""

from __future__ import annotations

__all__ = [
    "AdditiveStrategy",
    "ConstantStrategy",
    "MultiplicativeStrategy",
    "StopStrategy",
    "additive_strategy",
    "constant_strategy",
    "immediate_strategy",
    "multiplicative_strategy",
    "stop_strategy",
]

import itertools
from typing import TYPE_CHECKING

from again.strategy.base import BaseStrategy
from again.utils.numbers import match_delay_type
from again.utils.validation import validate_non_negative

if TYPE_CHECKING:
    from collections.abc import Iterator


class ConstantStrategy(BaseStrategy):
    """Constant delay strategy.

    Yields the same delay forever.

    Args:
        delay: The delay to repeat. Must be non-negative.

    Example:
        ```pycon
        >>> from itertools import islice
        >>> from again.strategy import ConstantStrategy
        >>> list(islice(ConstantStrategy(100), 3))
        [100, 100, 100]

        ```
    """

    def __init__(self, delay: float) -> None:
        validate_non_negative("delay", delay)
        self.delay = delay

    def __iter__(self) -> Iterator[float]:
        return itertools.repeat(self.delay)


class AdditiveStrategy(BaseStrategy):
    """Additive delay strategy.

    Yields ``initial_delay, initial_delay + increment,
    initial_delay + 2 * increment, ...``.

    Args:
        initial_delay: The first delay. Must be non-negative.
        increment: The amount added after each retry. Must be non-negative.

    Example:
        ```pycon
        >>> from itertools import islice
        >>> from again.strategy import AdditiveStrategy
        >>> list(islice(AdditiveStrategy(100, 50), 4))
        [100, 150, 200, 250]

        ```
    """

    def __init__(self, initial_delay: float, increment: float) -> None:
        validate_non_negative("initial_delay", initial_delay)
        validate_non_negative("increment", increment)
        self.initial_delay = initial_delay
        self.increment = match_delay_type(increment, initial_delay)

    def __iter__(self) -> Iterator[float]:
        delay = self.initial_delay
        while True:
            yield delay
            delay += self.increment


class MultiplicativeStrategy(BaseStrategy):
    """Multiplicative (exponential) delay strategy.

    Yields ``initial_delay, initial_delay * multiplier,
    initial_delay * multiplier ** 2, ...``. Each delay is computed from the
    previous one, so integer seeds and multipliers stay exact for any
    number of terms. A ``Decimal`` seed converts a ``float`` multiplier to
    ``Decimal``.

    Args:
        initial_delay: The first delay. Must be non-negative.
        multiplier: The factor applied after each retry. Must be
            non-negative.

    Example:
        ```pycon
        >>> from itertools import islice
        >>> from again.strategy import MultiplicativeStrategy
        >>> list(islice(MultiplicativeStrategy(100, 2), 4))
        [100, 200, 400, 800]

        ```
    """

    def __init__(self, initial_delay: float, multiplier: float) -> None:
        validate_non_negative("initial_delay", initial_delay)
        validate_non_negative("multiplier", multiplier)
        self.initial_delay = initial_delay
        self.multiplier = match_delay_type(multiplier, initial_delay)

    def __iter__(self) -> Iterator[float]:
        delay = self.initial_delay
        while True:
            yield delay
            delay *= self.multiplier


class StopStrategy(BaseStrategy):
    """Empty strategy: the operation is never retried.

    Example:
        ```pycon
        >>> from again.strategy import StopStrategy
        >>> list(StopStrategy())
        []

        ```
    """

    def __iter__(self) -> Iterator[float]:
        return iter(())


def constant_strategy(delay: float) -> ConstantStrategy:
    """Return a strategy that waits ``delay`` between every retry.

    Args:
        delay: The delay to repeat. Must be non-negative.

    Returns:
        An unbounded constant strategy.

    Raises:
        ValueError: If ``delay`` is negative.
    """
    return ConstantStrategy(delay)


def immediate_strategy() -> ConstantStrategy:
    """Return a strategy that retries without any delay."""
    return ConstantStrategy(0)


def additive_strategy(initial_delay: float, increment: float | None = None) -> AdditiveStrategy:
    """Return a strategy whose delay grows by ``increment`` after each
    retry.

    The single argument form ``additive_strategy(increment)`` uses the
    increment as both the initial delay and the increment.

    Args:
        initial_delay: The first delay, or the increment when
            ``increment`` is omitted.
        increment: The amount added after each retry.

    Returns:
        An unbounded additive strategy.

    Raises:
        ValueError: If ``initial_delay`` or ``increment`` is negative.

    Example:
        ```pycon
        >>> from itertools import islice
        >>> from again.strategy import additive_strategy
        >>> list(islice(additive_strategy(10), 3))
        [10, 20, 30]

        ```
    """
    if increment is None:
        increment = initial_delay
    return AdditiveStrategy(initial_delay, increment)


def multiplicative_strategy(initial_delay: float, multiplier: float) -> MultiplicativeStrategy:
    """Return a strategy whose delay is multiplied by ``multiplier`` after
    each retry.

    Args:
        initial_delay: The first delay.
        multiplier: The factor applied after each retry.

    Returns:
        An unbounded multiplicative strategy.

    Raises:
        ValueError: If ``initial_delay`` or ``multiplier`` is negative.
    """
    return MultiplicativeStrategy(initial_delay, multiplier)


def stop_strategy() -> StopStrategy:
    """Return the no-retries strategy."""
    return StopStrategy()
