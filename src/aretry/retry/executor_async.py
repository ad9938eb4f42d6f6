r"""Asynchronous retry executor for HTTP requests.

This module provides the AsyncRetryExecutor class that executes async
HTTP requests with automatic retry logic and cancellable backoff waits.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

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
from aretry.utils.sleep import async_wait_before_retry

if TYPE_CHECKING:
    import asyncio

    from aretry.requester import AsyncRequester
    from aretry.retry.manager import CallbackConfig

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes async HTTP requests with automatic retry logic.

    This is the asynchronous counterpart of ``RetryExecutor``, with the
    same attempt, backoff and error semantics. Backoff waits yield to the
    event loop, so other tasks run while a request waits to be retried.

    Attributes:
        requester: The collaborator performing single request attempts.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from aretry.requester import AsyncHttpxRequester
        >>> from aretry.retry import AsyncRetryExecutor
        >>>
        >>> async def main():
        ...     transport = httpx.MockTransport(lambda request: httpx.Response(200))
        ...     async with httpx.AsyncClient(transport=transport) as client:
        ...         executor = AsyncRetryExecutor(AsyncHttpxRequester(client))
        ...         response = await executor.run(
        ...             httpx.Request("GET", "https://api.example.com/data")
        ...         )
        ...     return response.status_code
        ...
        >>> asyncio.run(main())
        200

        ```
    """

    def __init__(
        self, requester: AsyncRequester, callback_config: CallbackConfig | None = None
    ) -> None:
        self.requester = requester
        self.callbacks: CallbackManager = CallbackManager(callback_config)

    async def run(
        self,
        request: httpx.Request,
        policy: RetryPolicy | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> httpx.Response:
        """Execute an async request with automatic retry logic.

        Note:
            Cancelling the task running this coroutine raises
            ``asyncio.CancelledError`` wherever the task is suspended,
            including during a request. ``cancel_event`` is observed
            during backoff waits only.

        Args:
            request: The prepared request.
            policy: The retry policy. Defaults to ``RetryPolicy()``.
            cancel_event: Optional event signaling cancellation.

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
                    await async_wait_before_retry(delay, cancel_event)
                except RequestCancelledError as exc:
                    logger.debug(f"{request.method} request to {request.url} cancelled")
                    self.callbacks.on_failure(
                        request, attempt - 1, policy.max_retries, exc, start_time
                    )
                    raise

            self.callbacks.on_request(request, attempt, policy.max_retries)
            try:
                response = await self.requester.execute(request)
            except httpx.TransportError as exc:
                error = create_transport_error(exc, request, attempt, policy)
                if error is not None:
                    self.callbacks.on_failure(request, attempt, policy.max_retries, error, start_time)
                    raise error from exc
                last_error, last_status_code = exc, None
                continue

            if should_retry_response(response, attempt, policy):
                await response.aclose()
                last_error, last_status_code = None, response.status_code
                continue

            self.callbacks.on_success(request, attempt, policy.max_retries, response, start_time)
            return response

        raise create_no_attempts_error(request, policy)  # pragma: no cover
