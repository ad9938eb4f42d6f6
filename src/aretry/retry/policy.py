r"""Retry policy deciding which outcomes are retried and how long to
wait between attempts.

A policy is immutable. The same instance can be shared by any number
of concurrent ``run`` calls.
"""

from __future__ import annotations

__all__ = ["RetryPolicy"]

import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from aretry.core.config import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_RETRY_DELAY,
    DEFAULT_RETRY_DELAY,
    RETRY_STATUS_CODES,
)
from aretry.core.validation import validate_retry_policy_params

if TYPE_CHECKING:
    import httpx


@dataclass(frozen=True)
class RetryPolicy:
    """Policy controlling the retry loop of the executors.

    Args:
        max_retries: Number of retries after the initial attempt. Zero
            disables retries. A negative value allows no attempt at all.
        retry_delay: Base unit of the backoff delay in seconds.
        max_retry_delay: Ceiling for a single backoff delay in seconds.
        backoff_multiplier: Growth factor of the backoff delay.
        retryable_status_codes: HTTP status codes that trigger a retry.

    Raises:
        ConfigError: If a delay or the multiplier is negative or not
            finite.

    Example:
        ```pycon
        >>> from aretry.retry import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.max_attempts
        4
        >>> policy.retryable_status_codes
        (408, 429, 500, 502, 503, 504)
        >>> policy.delay_for_attempt(0)
        0.2

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    max_retry_delay: float = DEFAULT_MAX_RETRY_DELAY
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER
    retryable_status_codes: tuple[int, ...] = RETRY_STATUS_CODES

    def __post_init__(self) -> None:
        validate_retry_policy_params(
            retry_delay=self.retry_delay,
            max_retry_delay=self.max_retry_delay,
            backoff_multiplier=self.backoff_multiplier,
        )
        # Normalize lists and sets so the policy stays hashable.
        object.__setattr__(self, "retryable_status_codes", tuple(self.retryable_status_codes))

    @property
    def max_attempts(self) -> int:
        """The total number of attempts allowed, including the initial
        one."""
        return max(self.max_retries + 1, 0)

    def is_retryable(
        self,
        response: httpx.Response | None = None,
        error: Exception | None = None,
    ) -> bool:
        """Indicate whether an attempt outcome should be retried.

        An outcome is either a transport error (no response obtained) or
        a response, never both.

        Args:
            response: The response of the attempt.
            error: The transport error of the attempt.

        Returns:
            ``False`` whenever ``max_retries`` is 0. Otherwise ``True``
            for every transport error, and ``True`` for a response whose
            status code is in ``retryable_status_codes``.

        Raises:
            ValueError: If both or neither of ``response`` and ``error``
                are given.

        Example:
            ```pycon
            >>> import httpx
            >>> from aretry.retry import RetryPolicy
            >>> policy = RetryPolicy(retryable_status_codes=(503,))
            >>> policy.is_retryable(response=httpx.Response(503))
            True
            >>> policy.is_retryable(response=httpx.Response(400))
            False
            >>> policy.is_retryable(error=httpx.ConnectError("connection refused"))
            True
            >>> RetryPolicy(max_retries=0).is_retryable(error=httpx.ConnectError("refused"))
            False

            ```
        """
        if (response is None) == (error is None):
            msg = "exactly one of response or error must be provided"
            raise ValueError(msg)
        if self.max_retries == 0:
            return False
        if error is not None:
            return True
        return response.status_code in self.retryable_status_codes

    def delay_for_attempt(self, attempt: int) -> float:
        """Compute the backoff delay before a retry.

        The delay grows linearly with the attempt number, scaled by
        ``backoff_multiplier``, and is capped at ``max_retry_delay``:
        ``min(retry_delay * (attempt + 1) * backoff_multiplier, max_retry_delay)``.
        A product that is not a number falls back to ``max_retry_delay``.

        Args:
            attempt: The retry number (0-indexed). The delay before the
                first retry uses ``attempt=0``.

        Returns:
            The delay in seconds.

        Example:
            ```pycon
            >>> from aretry.retry import RetryPolicy
            >>> policy = RetryPolicy(retry_delay=0.5, max_retry_delay=1.0)
            >>> policy.delay_for_attempt(0)
            1.0
            >>> policy.delay_for_attempt(5)
            1.0

            ```
        """
        delay = self.retry_delay * (attempt + 1) * self.backoff_multiplier
        if math.isnan(delay):
            # An overflow to inf multiplied by a zero multiplier.
            return self.max_retry_delay
        return min(delay, self.max_retry_delay)

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryPolicy instance with overrides applied.

        Example:
            ```pycon
            >>> from aretry.retry import RetryPolicy
            >>> policy = RetryPolicy().merge(max_retries=5, retry_delay=None)
            >>> policy.max_retries, policy.retry_delay
            (5, 0.1)

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
