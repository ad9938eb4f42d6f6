r"""Synchronous retry executor for HTTP requests.

This module provides the RetryExecutor class that executes HTTP
requests with automatic retry logic and cancellable backoff waits.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING

import httpx

from aretry.exceptions import RequestCancelledError
from aretry.retry.executor_core import (
    create_no_attempts_error,
    create_transport_error,
    should_retry_response,
)
from aretry.retry.manager import CallbackManager
from aretry.retry.policy import RetryPolicy
from aretry.utils.sleep import wait_before_retry

if TYPE_CHECKING:
    import threading

    from aretry.requester import Requester
    from aretry.retry.manager import CallbackConfig

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes HTTP requests with automatic retry logic.

    The executor holds no state across calls: any number of threads may
    call ``run`` on the same instance concurrently.

    Attributes:
        requester: The collaborator performing single request attempts.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry.requester import HttpxRequester
        >>> from aretry.retry import RetryExecutor, RetryPolicy
        >>> transport = httpx.MockTransport(lambda request: httpx.Response(200))
        >>> executor = RetryExecutor(HttpxRequester(httpx.Client(transport=transport)))
        >>> response = executor.run(
        ...     httpx.Request("GET", "https://api.example.com/data"),
        ...     policy=RetryPolicy(max_retries=2),
        ... )
        >>> response.status_code
        200

        ```
    """

    def __init__(self, requester: Requester, callback_config: CallbackConfig | None = None) -> None:
        self.requester = requester
        self.callbacks: CallbackManager = CallbackManager(callback_config)

    def run(
        self,
        request: httpx.Request,
        policy: RetryPolicy | None = None,
        cancel_event: threading.Event | None = None,
    ) -> httpx.Response:
        """Execute a request with automatic retry logic.

        The request is attempted up to ``policy.max_attempts`` times. Before
        every attempt but the first, the executor waits for
        ``policy.delay_for_attempt(attempt - 1)`` seconds, unless
        ``cancel_event`` is set first.

        - A response whose status is not retryable is returned immediately.
        - A response with a retryable status is closed and retried while
          attempts remain. On the last attempt it is returned.
        - A transport error (``httpx.TransportError``) is retried while
          attempts remain and the policy allows retries.

        Args:
            request: The prepared request.
            policy: The retry policy. Defaults to ``RetryPolicy()``.
            cancel_event: Optional event signaling cancellation. It is
                observed during backoff waits only.

        Returns:
            The final response. The caller owns it and is responsible for
            closing it.

        Raises:
            NoAttemptsError: If the policy allows zero attempts.
            RequestFailedError: If a transport error occurs and the policy
                does not retry it.
            RetriesExhaustedError: If the last allowed attempt ends with a
                transport error.
            RequestCancelledError: If ``cancel_event`` is set during a
                backoff wait.
        """
        if policy is None:
            policy = RetryPolicy()
        max_attempts = policy.max_attempts
        if max_attempts == 0:
            raise create_no_attempts_error(request, policy)

        start_time = time.time()
        last_error: Exception | None = None
        last_status_code: int | None = None

        for attempt in range(max_attempts):
            if attempt > 0:
                delay = policy.delay_for_attempt(attempt - 1)
                self.callbacks.on_retry(
                    request, attempt, policy.max_retries, delay, last_error, last_status_code
                )
                try:
                    wait_before_retry(delay, cancel_event)
                except RequestCancelledError as exc:
                    logger.debug(f"{request.method} request to {request.url} cancelled")
                    self.callbacks.on_failure(
                        request, attempt - 1, policy.max_retries, exc, start_time
                    )
                    raise

            self.callbacks.on_request(request, attempt, policy.max_retries)
            try:
                response = self.requester.execute(request)
            except httpx.TransportError as exc:
                error = create_transport_error(exc, request, attempt, policy)
                if error is not None:
                    self.callbacks.on_failure(request, attempt, policy.max_retries, error, start_time)
                    raise error from exc
                last_error, last_status_code = exc, None
                continue

            if should_retry_response(response, attempt, policy):
                response.close()
                last_error, last_status_code = None, response.status_code
                continue

            self.callbacks.on_success(request, attempt, policy.max_retries, response, start_time)
            return response

        raise create_no_attempts_error(request, policy)  # pragma: no cover
