r"""Configuration dataclass and defaults for the retry executor.

This module provides ``RetryOptions``, the configuration record driving
one execution, and ``normalize_options``, which turns the accepted
shorthands (a bare strategy or a mapping of option names) into a
``RetryOptions`` instance.
"""

from __future__ import annotations

__all__ = ["DEFAULT_STRATEGY", "OPTION_NAMES", "RetryOptions", "normalize_options"]

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

from again.utils.validation import validate_non_negative

if TYPE_CHECKING:
    from collections.abc import Callable

    from again.callbacks import AttemptReport


# The default strategy never retries: the operation runs once
DEFAULT_STRATEGY: tuple[float, ...] = ()


@dataclass(frozen=True)
class RetryOptions:
    """Configuration for one retried execution.

    Args:
        strategy: The delays to wait between attempts. Any iterable of
            non-negative delays, possibly unbounded. Defaults to the empty
            strategy (no retries).
        callback: Optional function invoked with an ``AttemptReport``
            after every attempt. Its return value is ignored unless it is
            ``FORCE_FAIL``.
        user_context: Opaque value echoed unchanged in every report.
        exception_predicate: Optional function deciding whether an
            exception is retryable. Defaults to retrying every
            ``Exception``.
        sleep: Optional blocking sleep called with each delay. Defaults to
            ``sleep_ms``, which interprets delays as milliseconds.

    Example:
        ```pycon
        >>> from again.config import RetryOptions
        >>> options = RetryOptions(strategy=[100, 200])
        >>> options.strategy
        [100, 200]
        >>> options.merge(user_context="job-1").user_context
        'job-1'

        ```
    """

    strategy: Iterable[float] = DEFAULT_STRATEGY
    callback: Callable[[AttemptReport], Any] | None = None
    user_context: Any = None
    exception_predicate: Callable[[Exception], bool] | None = None
    sleep: Callable[[float], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            TypeError: If the strategy is not iterable or one of the
                hooks is not callable.
            ValueError: If the strategy is a sequence holding a negative
                delay.
        """
        if not isinstance(self.strategy, Iterable):
            msg = f"strategy must be an iterable of delays, got {type(self.strategy).__name__}"
            raise TypeError(msg)
        if isinstance(self.strategy, Sequence):
            for delay in self.strategy:
                validate_non_negative("delay", delay)
        for name in ("callback", "exception_predicate", "sleep"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                msg = f"{name} must be callable, got {type(value).__name__}"
                raise TypeError(msg)

    def merge(self, **overrides: Any) -> RetryOptions:
        """Create new options with the specified fields overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for fields to override.

        Returns:
            A new ``RetryOptions`` instance.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the options to a dictionary keyed by option name."""
        return {name: getattr(self, name) for name in OPTION_NAMES}


OPTION_NAMES: tuple[str, ...] = tuple(f.name for f in fields(RetryOptions))


def normalize_options(options: RetryOptions | Mapping[str, Any] | Iterable[float]) -> RetryOptions:
    """Normalize the accepted option shorthands into ``RetryOptions``.

    Args:
        options: A ``RetryOptions`` instance, a mapping of option names
            (hyphenated names such as ``"user-context"`` are accepted), or
            a bare strategy.

    Returns:
        The normalized options.

    Raises:
        TypeError: If a mapping contains an unknown option name or
            ``options`` is none of the accepted shapes.

    Example:
        ```pycon
        >>> from again.config import normalize_options
        >>> normalize_options([10, 20]).strategy
        [10, 20]
        >>> normalize_options({"strategy": [5], "user-context": 42}).user_context
        42

        ```
    """
    if isinstance(options, RetryOptions):
        return options
    if isinstance(options, Mapping):
        kwargs = {str(key).replace("-", "_"): value for key, value in options.items()}
        unknown = sorted(set(kwargs) - set(OPTION_NAMES))
        if unknown:
            msg = f"unknown retry options: {', '.join(unknown)}"
            raise TypeError(msg)
        return RetryOptions(**kwargs)
    if isinstance(options, Iterable):
        return RetryOptions(strategy=options)
    msg = f"options must be RetryOptions, a mapping or a strategy, got {type(options).__name__}"
    raise TypeError(msg)
