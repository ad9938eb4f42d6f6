r"""Unit tests for the exception hierarchy."""

from __future__ import annotations

import httpx
import pytest

from aretry.exceptions import (
    ConfigError,
    HttpRequestError,
    NoAttemptsError,
    RequestCancelledError,
    RequestFailedError,
    RetriesExhaustedError,
)


def test_http_request_error_attributes() -> None:
    response = httpx.Response(503)
    cause = httpx.ConnectError("connection refused")
    error = HttpRequestError(
        method="GET",
        url="https://api.example.com",
        message="failed",
        status_code=503,
        response=response,
        cause=cause,
    )

    assert str(error) == "failed"
    assert error.method == "GET"
    assert error.url == "https://api.example.com"
    assert error.status_code == 503
    assert error.response is response
    assert error.cause is cause


def test_http_request_error_defaults() -> None:
    error = HttpRequestError(method="POST", url="https://api.example.com", message="failed")

    assert error.status_code is None
    assert error.response is None
    assert error.cause is None


def test_http_request_error_repr() -> None:
    error = RequestFailedError(method="GET", url="https://api.example.com", message="failed")

    assert repr(error) == (
        "RequestFailedError(method='GET', url='https://api.example.com', status_code=None)"
    )


def test_retries_exhausted_error_attempts() -> None:
    cause = httpx.ConnectError("connection refused")
    error = RetriesExhaustedError(
        method="GET", url="https://api.example.com", message="failed", attempts=4, cause=cause
    )

    assert error.attempts == 4
    assert error.cause is cause


@pytest.mark.parametrize(
    ("cls", "base"),
    [
        (ConfigError, ValueError),
        (NoAttemptsError, ConfigError),
        (HttpRequestError, RuntimeError),
        (RequestFailedError, HttpRequestError),
        (RetriesExhaustedError, HttpRequestError),
        (RequestCancelledError, RuntimeError),
    ],
)
def test_exception_hierarchy(cls: type, base: type) -> None:
    assert issubclass(cls, base)


def test_cancellation_is_distinct_from_request_failures() -> None:
    assert not issubclass(RequestCancelledError, HttpRequestError)
    assert not issubclass(RequestFailedError, RetriesExhaustedError)
    assert not issubclass(RetriesExhaustedError, RequestFailedError)
