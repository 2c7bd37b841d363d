r"""Parameter validation utilities for retry strategies.

This module provides validation functions used by the strategy
generators and manipulators to reject invalid arguments at construction
time, before any attempt is made.
"""

from __future__ import annotations

__all__ = ["validate_non_negative", "validate_rand_factor"]


def validate_non_negative(name: str, value: float) -> None:
    """Validate that a strategy parameter is non-negative.

    Args:
        name: The parameter name used in the error message.
        value: The value to check.

    Raises:
        ValueError: If ``value`` is negative.

    Example:
        ```pycon
        >>> from again.utils.validation import validate_non_negative
        >>> validate_non_negative("delay", 0)
        >>> validate_non_negative("delay", 100)
        >>> validate_non_negative("delay", -1)
        Traceback (most recent call last):
        ...
        ValueError: delay must be >= 0, got -1

        ```
    """
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ValueError(msg)


def validate_rand_factor(rand_factor: float) -> None:
    """Validate a randomization factor.

    Args:
        rand_factor: The randomization factor. Must be in the open
            interval (0, 1).

    Raises:
        ValueError: If ``rand_factor`` is not strictly between 0 and 1.

    Example:
        ```pycon
        >>> from again.utils.validation import validate_rand_factor
        >>> validate_rand_factor(0.5)
        >>> validate_rand_factor(1.0)
        Traceback (most recent call last):
        ...
        ValueError: rand_factor must be > 0 and < 1, got 1.0

        ```
    """
    if not 0 < rand_factor < 1:
        msg = f"rand_factor must be > 0 and < 1, got {rand_factor}"
        raise ValueError(msg)
