r"""Blocking sleep used between attempts."""

from __future__ import annotations

__all__ = ["sleep_ms"]

import logging
import time

logger: logging.Logger = logging.getLogger(__name__)


def sleep_ms(delay: float) -> None:
    """Block the calling thread for ``delay`` milliseconds.

    Args:
        delay: The delay in milliseconds. ``int``, ``float``,
            ``Fraction`` and ``Decimal`` values are accepted.

    Example:
        ```pycon
        >>> from again.utils.sleep import sleep_ms
        >>> sleep_ms(1)

        ```
    """
    logger.debug(f"Sleeping {delay}ms before retry")
    time.sleep(float(delay) / 1000)
