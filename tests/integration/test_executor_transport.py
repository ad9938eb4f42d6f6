r"""End-to-end tests of the retry executors over an in-memory
transport."""

from __future__ import annotations

from unittest.mock import Mock

import httpx
import pytest

from aretry import (
    AsyncRetryExecutor,
    RequestFailedError,
    RetriesExhaustedError,
    RetryExecutor,
    RetryPolicy,
)
from aretry.requester import AsyncHttpxRequester, HttpxRequester

TEST_URL = "https://api.example.com/data"


class ScriptedHandler:
    r"""Transport handler replaying a script of status codes and
    exceptions, one entry per call."""

    def __init__(self, *outcomes: int | type[httpx.TransportError]) -> None:
        self._outcomes = list(outcomes)
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        outcome = self._outcomes[self.calls]
        self.calls += 1
        if isinstance(outcome, int):
            return httpx.Response(outcome, text=f"attempt {self.calls}")
        raise outcome("scripted failure", request=request)


class AsyncScriptedHandler(ScriptedHandler):
    async def __call__(self, request: httpx.Request) -> httpx.Response:
        return super().__call__(request)


##################################################
#     Tests for RetryExecutor over transport     #
##################################################


def test_executor_recovers_after_server_errors(mock_sleep: Mock) -> None:
    handler = ScriptedHandler(500, 503, 200)
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        executor = RetryExecutor(HttpxRequester(client, user_agent="aretry-test"))
        response = executor.run(httpx.Request("GET", TEST_URL))

    assert response.status_code == 200
    assert response.text == "attempt 3"
    assert handler.calls == 3
    assert [call.args[0] for call in mock_sleep.call_args_list] == [0.2, 0.4]


def test_executor_recovers_after_connection_error(mock_sleep: Mock) -> None:
    handler = ScriptedHandler(httpx.ConnectError, 200)
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        response = RetryExecutor(HttpxRequester(client)).run(httpx.Request("GET", TEST_URL))

    assert response.status_code == 200
    assert handler.calls == 2
    mock_sleep.assert_called_once_with(0.2)


def test_executor_returns_last_retryable_response(mock_sleep: Mock) -> None:
    handler = ScriptedHandler(503, 503, 503)
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        response = RetryExecutor(HttpxRequester(client)).run(
            httpx.Request("GET", TEST_URL), RetryPolicy(max_retries=2)
        )

    assert response.status_code == 503
    assert response.text == "attempt 3"
    assert handler.calls == 3


def test_executor_returns_non_retryable_response(mock_sleep: Mock) -> None:
    handler = ScriptedHandler(404)
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        response = RetryExecutor(HttpxRequester(client)).run(httpx.Request("GET", TEST_URL))

    assert response.status_code == 404
    assert handler.calls == 1
    mock_sleep.assert_not_called()


def test_executor_exhausts_on_connection_errors(mock_sleep: Mock) -> None:
    handler = ScriptedHandler(httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectError)
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        executor = RetryExecutor(HttpxRequester(client))
        with pytest.raises(RetriesExhaustedError, match=r"failed after 3 attempts") as exc_info:
            executor.run(httpx.Request("GET", TEST_URL), RetryPolicy(max_retries=2))

    assert exc_info.value.attempts == 3
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert handler.calls == 3


def test_executor_no_retry_on_connection_error(mock_sleep: Mock) -> None:
    handler = ScriptedHandler(httpx.ConnectError)
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        executor = RetryExecutor(HttpxRequester(client))
        with pytest.raises(RequestFailedError, match=r"failed to execute GET request"):
            executor.run(httpx.Request("GET", TEST_URL), RetryPolicy(max_retries=0))

    assert handler.calls == 1
    mock_sleep.assert_not_called()


#######################################################
#     Tests for AsyncRetryExecutor over transport     #
#######################################################


@pytest.mark.asyncio
async def test_async_executor_recovers_after_server_errors(mock_asleep: Mock) -> None:
    handler = AsyncScriptedHandler(429, httpx.ConnectError, 200)
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        response = await AsyncRetryExecutor(AsyncHttpxRequester(client)).run(
            httpx.Request("POST", TEST_URL, json={"key": "value"})
        )

    assert response.status_code == 200
    assert handler.calls == 3
    assert [call.args[0] for call in mock_asleep.call_args_list] == [0.2, 0.4]


@pytest.mark.asyncio
async def test_async_executor_exhausts_on_server_errors(mock_asleep: Mock) -> None:
    handler = AsyncScriptedHandler(502, 502)
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        response = await AsyncRetryExecutor(AsyncHttpxRequester(client)).run(
            httpx.Request("GET", TEST_URL), RetryPolicy(max_retries=1)
        )

    assert response.status_code == 502
    assert handler.calls == 2
