r"""Shared core logic for retry executors.

This module provides the decision helpers used by both the synchronous
and asynchronous retry executors, so that the two loops only differ in
how they perform I/O and wait.
"""

from __future__ import annotations

__all__ = [
    "create_no_attempts_error",
    "create_transport_error",
    "should_retry_response",
]

import logging
from typing import TYPE_CHECKING

from aretry.exceptions import (
    HttpRequestError,
    NoAttemptsError,
    RequestFailedError,
    RetriesExhaustedError,
)

if TYPE_CHECKING:
    import httpx

    from aretry.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


def create_no_attempts_error(request: httpx.Request, policy: RetryPolicy) -> NoAttemptsError:
    """Create the error raised when the policy allows zero attempts.

    Args:
        request: The request that was not sent.
        policy: The retry policy.

    Returns:
        The error to raise.
    """
    logger.debug(
        f"{request.method} request to {request.url} not sent: "
        f"max_retries={policy.max_retries} allows no attempt"
    )
    return NoAttemptsError(f"no attempts made (max_retries={policy.max_retries})")


def create_transport_error(
    exc: Exception,
    request: httpx.Request,
    attempt: int,
    policy: RetryPolicy,
) -> HttpRequestError | None:
    """Decide the fate of an attempt that ended with a transport error.

    Args:
        exc: The transport error raised by the requester.
        request: The request being sent.
        attempt: Current attempt number (0-indexed).
        policy: The retry policy.

    Returns:
        The error to raise, or ``None`` if the request should be retried.
        ``RequestFailedError`` is returned when the policy does not retry
        the error, and ``RetriesExhaustedError`` when it was the last
        allowed attempt.
    """
    method, url = request.method, str(request.url)
    error_type = type(exc).__name__
    logger.debug(
        f"{method} request to {url} encountered {error_type} on attempt "
        f"{attempt + 1}/{policy.max_attempts}: {exc}"
    )
    if not policy.is_retryable(error=exc):
        return RequestFailedError(
            method=method,
            url=url,
            message=f"failed to execute {method} request to {url}: {exc}",
            cause=exc,
        )
    if attempt >= policy.max_retries:
        return RetriesExhaustedError(
            method=method,
            url=url,
            message=f"{method} request to {url} failed after {attempt + 1} attempts: {exc}",
            attempts=attempt + 1,
            cause=exc,
        )
    return None


def should_retry_response(response: httpx.Response, attempt: int, policy: RetryPolicy) -> bool:
    """Decide whether a response should be discarded and retried.

    A retryable status code on the last allowed attempt is not retried:
    the response is returned to the caller like any other.

    Args:
        response: The response of the attempt.
        attempt: Current attempt number (0-indexed).
        policy: The retry policy.

    Returns:
        ``True`` if another attempt should be made.
    """
    if not policy.is_retryable(response=response):
        return False
    if attempt >= policy.max_retries:
        logger.debug(
            f"server error: status {response.status_code} on last attempt "
            f"{attempt + 1}/{policy.max_attempts}, returning response"
        )
        return False
    logger.debug(
        f"server error: status {response.status_code} on attempt "
        f"{attempt + 1}/{policy.max_attempts}, will retry"
    )
    return True
