r"""Data passed to the lifecycle hooks of the retry executors.

A ``CallbackConfig`` holds up to four hooks, each called with one
object of this module:

- ``on_request`` gets a ``RequestInfo`` before every attempt
- ``on_retry`` gets a ``RetryInfo`` before every backoff wait
- ``on_success`` gets a ``ResponseInfo`` when ``run`` returns a response,
  including the last response of a retryable status
- ``on_failure`` gets a ``FailureInfo`` when ``run`` raises

Attempt numbers start at 1. The request itself is not passed, only its
method and URL, so a hook cannot alter a request that may be sent again.

Example:
    ```pycon
    >>> from aretry.callbacks import RetryInfo
    >>> from aretry.retry import CallbackConfig
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"{info.method} {info.url}: attempt {info.attempt} in {info.wait_time}s")
    ...
    >>> config = CallbackConfig(on_retry=log_retry)

    ```
"""

from __future__ import annotations

__all__ = ["AttemptInfo", "FailureInfo", "RequestInfo", "ResponseInfo", "RetryInfo"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


@dataclass
class AttemptInfo:
    """Fields shared by every hook payload.

    Attributes:
        url: The absolute URL of the request.
        method: The HTTP method of the request.
        attempt: The attempt number, starting at 1. Its exact meaning
            depends on the hook.
        max_retries: The ``max_retries`` of the policy in use.
    """

    url: str
    method: str
    attempt: int
    max_retries: int


@dataclass
class RequestInfo(AttemptInfo):
    """Payload of ``on_request``. ``attempt`` is the attempt about to be
    sent."""


@dataclass
class RetryInfo(AttemptInfo):
    """Payload of ``on_retry``, fired before the wait starts.

    ``attempt`` is the attempt that will be sent once the wait is over,
    so the first retry reports 2. The outcome that caused the retry is
    exactly one of ``error`` and ``status_code``.

    Attributes:
        wait_time: The delay of the upcoming wait, in seconds.
        error: The transport error of the previous attempt, or ``None``.
        status_code: The retryable status of the previous attempt, or
            ``None``. Its response has already been closed.
    """

    wait_time: float
    error: Exception | None
    status_code: int | None


@dataclass
class ResponseInfo(AttemptInfo):
    """Payload of ``on_success``.

    ``attempt`` is the attempt that produced ``response``. The status is
    not checked: a retryable status returned after the last allowed
    attempt is reported here too.
    """

    response: httpx.Response
    total_time: float


@dataclass
class FailureInfo(AttemptInfo):
    """Payload of ``on_failure``.

    ``attempt`` is the number of attempts sent before the failure. When
    the run is cancelled during a backoff wait, this is the number of
    attempts made before that wait.

    Attributes:
        error: The exception ``run`` is about to raise, a
            ``RequestFailedError``, ``RetriesExhaustedError`` or
            ``RequestCancelledError``.
        total_time: Seconds elapsed since the start of ``run``, waits
            included.
    """

    error: Exception
    total_time: float
