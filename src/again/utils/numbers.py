r"""Numeric helpers keeping delay arithmetic in the delay's own type."""

from __future__ import annotations

__all__ = ["match_delay_type"]

from decimal import Decimal
from fractions import Fraction


def match_delay_type(value: float, delay: float) -> float:
    """Convert ``value`` so that it can be combined with ``delay``.

    ``Decimal`` does not mix with ``float`` or ``Fraction``, so those
    values are converted to ``Decimal`` when ``delay`` is a ``Decimal``.
    Any other combination is returned unchanged.

    Args:
        value: The factor, increment or random draw to convert.
        delay: The delay ``value`` is combined with.

    Returns:
        ``value``, as a ``Decimal`` if ``delay`` is one.

    Example:
        ```pycon
        >>> from decimal import Decimal
        >>> from again.utils.numbers import match_delay_type
        >>> match_delay_type(1.5, Decimal("100"))
        Decimal('1.5')
        >>> match_delay_type(1.5, 100)
        1.5

        ```
    """
    if not isinstance(delay, Decimal) or isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Fraction):
        return Decimal(value.numerator) / Decimal(value.denominator)
    return value
