r"""Parameter validation utilities for retry policies and clients.

This module provides validation functions to ensure parameters meet
the required constraints before they are used by the retry executors.
"""

from __future__ import annotations

__all__ = ["validate_retry_policy_params", "validate_timeout"]

import math

from aretry.exceptions import ConfigError


def validate_timeout(timeout: float) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for a single request.
            Must be > 0.

    Raises:
        ConfigError: If timeout is <= 0 or NaN.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)
        Traceback (most recent call last):
        ...
        aretry.exceptions.ConfigError: timeout must be > 0, got 0

        ```
    """
    if not timeout > 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ConfigError(msg)


def validate_retry_policy_params(
    retry_delay: float,
    max_retry_delay: float,
    backoff_multiplier: float,
) -> None:
    """Validate retry policy parameters.

    ``max_retries`` is not validated: a negative value is legal and
    means that no attempt is allowed.

    Args:
        retry_delay: Base unit of the backoff delay in seconds.
            Must be finite and >= 0.
        max_retry_delay: Ceiling for a single backoff delay in seconds.
            Must be finite and >= 0.
        backoff_multiplier: Growth factor of the backoff delay.
            Must be finite and >= 0.

    Raises:
        ConfigError: If any parameter is negative, NaN or infinite.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_retry_policy_params
        >>> validate_retry_policy_params(retry_delay=0.1, max_retry_delay=2.0, backoff_multiplier=2.0)
        >>> validate_retry_policy_params(retry_delay=-1.0, max_retry_delay=2.0, backoff_multiplier=2.0)
        Traceback (most recent call last):
        ...
        aretry.exceptions.ConfigError: retry_delay must be >= 0, got -1.0
        >>> validate_retry_policy_params(retry_delay=0.1, max_retry_delay=float("inf"), backoff_multiplier=2.0)
        Traceback (most recent call last):
        ...
        aretry.exceptions.ConfigError: max_retry_delay must be finite, got inf

        ```
    """
    _validate_non_negative("retry_delay", retry_delay)
    _validate_non_negative("max_retry_delay", max_retry_delay)
    _validate_non_negative("backoff_multiplier", backoff_multiplier)


def _validate_non_negative(name: str, value: float) -> None:
    # NaN fails every comparison, so test for the accepted range.
    if not value >= 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ConfigError(msg)
    if math.isinf(value):
        msg = f"{name} must be finite, got {value}"
        raise ConfigError(msg)
