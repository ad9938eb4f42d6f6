r"""Callback configuration and manager for retry lifecycle events.

This module provides the CallbackConfig dataclass and the
CallbackManager class that invokes user-defined callbacks at various
points in the retry lifecycle.
"""

from __future__ import annotations

__all__ = ["CallbackConfig", "CallbackManager"]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from aretry.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx


@dataclass
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_request: Optional callback invoked before each request attempt.
        on_retry: Optional callback invoked before each backoff wait.
        on_success: Optional callback invoked when a response is returned.
        on_failure: Optional callback invoked when the retry loop raises.
    """

    on_request: Callable[[RequestInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    Attempt numbers are 0-indexed on input and passed to the callbacks
    1-indexed.

    Attributes:
        callbacks: Configuration containing callback functions for lifecycle events.
    """

    def __init__(self, callbacks: CallbackConfig | None = None) -> None:
        self.callbacks = callbacks or CallbackConfig()

    def on_request(self, request: httpx.Request, attempt: int, max_retries: int) -> None:
        """Invoke on_request callback.

        Args:
            request: The request about to be sent.
            attempt: Current attempt number (0-indexed).
            max_retries: Maximum number of retries.
        """
        if self.callbacks.on_request:
            self.callbacks.on_request(
                RequestInfo(
                    url=str(request.url),
                    method=request.method,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                )
            )

    def on_retry(
        self,
        request: httpx.Request,
        attempt: int,
        max_retries: int,
        wait_time: float,
        error: Exception | None,
        status_code: int | None,
    ) -> None:
        """Invoke on_retry callback.

        Args:
            request: The request being retried.
            attempt: Number of the upcoming attempt (0-indexed).
            max_retries: Maximum number of retries.
            wait_time: Backoff delay before the retry.
            error: Transport error that triggered the retry (if any).
            status_code: Status code that triggered the retry (if any).
        """
        if self.callbacks.on_retry:
            self.callbacks.on_retry(
                RetryInfo(
                    url=str(request.url),
                    method=request.method,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    wait_time=wait_time,
                    error=error,
                    status_code=status_code,
                )
            )

    def on_success(
        self,
        request: httpx.Request,
        attempt: int,
        max_retries: int,
        response: httpx.Response,
        start_time: float,
    ) -> None:
        """Invoke on_success callback.

        Args:
            request: The request that was sent.
            attempt: Attempt number that produced the response (0-indexed).
            max_retries: Maximum number of retries.
            response: The returned response.
            start_time: Timestamp when the retry loop started.
        """
        if self.callbacks.on_success:
            self.callbacks.on_success(
                ResponseInfo(
                    url=str(request.url),
                    method=request.method,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    response=response,
                    total_time=time.time() - start_time,
                )
            )

    def on_failure(
        self,
        request: httpx.Request,
        attempt: int,
        max_retries: int,
        error: Exception,
        start_time: float,
    ) -> None:
        """Invoke on_failure callback.

        Args:
            request: The request that was sent.
            attempt: Final attempt number (0-indexed).
            max_retries: Maximum number of retries.
            error: The error raised by the retry loop.
            start_time: Timestamp when the retry loop started.
        """
        if self.callbacks.on_failure:
            self.callbacks.on_failure(
                FailureInfo(
                    url=str(request.url),
                    method=request.method,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    error=error,
                    total_time=time.time() - start_time,
                )
            )
