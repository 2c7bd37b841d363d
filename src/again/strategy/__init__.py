r"""Retry strategies: generators, manipulators and randomization.

A retry strategy is a lazy, possibly unbounded sequence of delays. This
package provides the generators that create primitive strategies and the
manipulators that truncate, cap and randomize them. Any iterable of
delays, e.g. a plain list, is also a valid strategy.

Example:
    ```pycon
    >>> from again.strategy import additive_strategy, max_delay
    >>> list(max_delay(500, additive_strategy(100)))
    [100, 200, 300, 400]

    ```
"""

from __future__ import annotations

__all__ = [
    "AdditiveStrategy",
    "BaseStrategy",
    "ClampDelay",
    "ConstantStrategy",
    "MaxDelay",
    "MaxDuration",
    "MaxRetries",
    "MultiplicativeStrategy",
    "RandomizedStrategy",
    "StopStrategy",
    "additive_strategy",
    "clamp_delay",
    "constant_strategy",
    "immediate_strategy",
    "max_delay",
    "max_duration",
    "max_retries",
    "multiplicative_strategy",
    "randomize_delay",
    "randomize_strategy",
    "stop_strategy",
]

from again.strategy.base import BaseStrategy
from again.strategy.generators import (
    AdditiveStrategy,
    ConstantStrategy,
    MultiplicativeStrategy,
    StopStrategy,
    additive_strategy,
    constant_strategy,
    immediate_strategy,
    multiplicative_strategy,
    stop_strategy,
)
from again.strategy.manipulators import (
    ClampDelay,
    MaxDelay,
    MaxDuration,
    MaxRetries,
    clamp_delay,
    max_delay,
    max_duration,
    max_retries,
)
from again.strategy.randomize import RandomizedStrategy, randomize_delay, randomize_strategy
