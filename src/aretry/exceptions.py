r"""Exception classes raised by the retry executors and clients.

The hierarchy lets callers tell apart the three ways a retried request
can end without a response:

- ``RequestCancelledError``: the caller cancelled during a backoff wait
- ``RetriesExhaustedError``: every allowed attempt hit a transport error
- ``RequestFailedError``: a transport error occurred and retries were
  disabled by the policy

Configuration problems detected before any attempt raise
``ConfigError`` (or its subclass ``NoAttemptsError``).
"""

from __future__ import annotations

__all__ = [
    "ConfigError",
    "HttpRequestError",
    "NoAttemptsError",
    "RequestCancelledError",
    "RequestFailedError",
    "RetriesExhaustedError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class ConfigError(ValueError):
    """Exception raised when a policy or client configuration is invalid.

    Example:
        ```pycon
        >>> from aretry.exceptions import ConfigError
        >>> raise ConfigError("base URL is required")
        Traceback (most recent call last):
            ...
        aretry.exceptions.ConfigError: base URL is required

        ```
    """


class NoAttemptsError(ConfigError):
    """Exception raised when a retry policy allows zero attempts.

    This happens when ``max_retries`` is negative. No request is sent.
    """


class HttpRequestError(RuntimeError):
    """Exception raised when an HTTP request could not be completed.

    Args:
        method: The HTTP method used for the request.
        url: The URL that was requested.
        message: A descriptive error message.
        status_code: The HTTP status code, if a response was obtained.
        response: The response object, if a response was obtained.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from aretry.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET",
        ...     url="https://api.example.com/data",
        ...     message="GET request to https://api.example.com/data failed",
        ... )
        >>> error.method
        'GET'
        >>> error.status_code is None
        True

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.response = response
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(method={self.method!r}, url={self.url!r}, "
            f"status_code={self.status_code!r})"
        )


class RequestFailedError(HttpRequestError):
    """Exception raised when a transport error occurs and the policy does
    not allow retries."""


class RetriesExhaustedError(HttpRequestError):
    """Exception raised when the last allowed attempt ends with a
    transport error.

    Args:
        method: The HTTP method used for the request.
        url: The URL that was requested.
        message: A descriptive error message.
        attempts: The number of attempts made.
        cause: The transport error of the last attempt.
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        attempts: int,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(method=method, url=url, message=message, cause=cause)
        self.attempts = attempts


class RequestCancelledError(RuntimeError):
    """Exception raised when the caller cancels a request during a
    backoff wait.

    It does not derive from ``HttpRequestError`` so that a cancellation
    is never mistaken for a failed request.
    """
