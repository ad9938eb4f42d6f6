r"""aretry - Resilient HTTP request executor with automatic retry logic.

This package sends prepared ``httpx`` requests and retries them on
transient failures (transport errors and a configurable set of HTTP
status codes), with a capped backoff between attempts. Every backoff
wait can be cancelled by the caller.

Key Features:
    - Immutable retry policy shared safely between threads and tasks
    - Synchronous and asynchronous retry executors
    - Cancellable backoff waits (``threading.Event`` or ``asyncio.Event``)
    - Distinct errors for cancellation, exhausted retries and
      non-retryable failures
    - Clients with TLS/mTLS setup, default user agent and trace context
      propagation
    - Callback system for observability (logging, metrics, alerting)

Example:
    ```pycon
    >>> import httpx
    >>> from aretry import ResilientClient, RetryPolicy
    >>> from aretry.core.config import ClientConfig
    >>> config = ClientConfig(base_url="https://api.example.com", user_agent="my-app/1.0")
    >>> with ResilientClient(config) as client:  # doctest: +SKIP
    ...     response = client.do_with_retry(
    ...         httpx.Request("GET", f"{client.base_url}/data"),
    ...         policy=RetryPolicy(max_retries=5),
    ...     )
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncResilientClient",
    "AsyncRetryExecutor",
    "ConfigError",
    "HttpRequestError",
    "NoAttemptsError",
    "RequestCancelledError",
    "RequestFailedError",
    "ResilientClient",
    "RetriesExhaustedError",
    "RetryExecutor",
    "RetryPolicy",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.client import ResilientClient
from aretry.client_async import AsyncResilientClient
from aretry.exceptions import (
    ConfigError,
    HttpRequestError,
    NoAttemptsError,
    RequestCancelledError,
    RequestFailedError,
    RetriesExhaustedError,
)
from aretry.retry import AsyncRetryExecutor, RetryExecutor, RetryPolicy

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
