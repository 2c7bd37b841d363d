r"""Utility functions shared by the strategies and the executor.

This package provides parameter validation, the default blocking sleep,
numeric type matching for delays and structured logging helpers.
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "log_structured",
    "match_delay_type",
    "sleep_ms",
    "validate_non_negative",
    "validate_rand_factor",
]

from again.utils.numbers import match_delay_type
from again.utils.sleep import sleep_ms
from again.utils.structured_logging import StructuredFormatter, log_structured
from again.utils.validation import validate_non_negative, validate_rand_factor
