r"""Unit tests for the requesters."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from aretry.requester import (
    AsyncHttpxRequester,
    AsyncRequester,
    HttpxRequester,
    Requester,
    prepare_request,
)

TEST_URL = "https://api.example.com/data"


def echo_user_agent(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"user-agent": request.headers.get("User-Agent")})


#####################################
#     Tests for prepare_request     #
#####################################


def test_prepare_request_sets_user_agent() -> None:
    request = prepare_request(httpx.Request("GET", TEST_URL), "test-agent", None)

    assert request.headers["User-Agent"] == "test-agent"


def test_prepare_request_keeps_existing_user_agent() -> None:
    request = httpx.Request("GET", TEST_URL, headers={"User-Agent": "custom"})

    prepare_request(request, "test-agent", None)

    assert request.headers["User-Agent"] == "custom"


def test_prepare_request_without_user_agent() -> None:
    request = prepare_request(httpx.Request("GET", TEST_URL), "", None)

    assert "User-Agent" not in request.headers


def test_prepare_request_sets_sni_hostname() -> None:
    request = prepare_request(httpx.Request("GET", TEST_URL), "", "internal.example.com")

    assert request.extensions["sni_hostname"] == "internal.example.com"


def test_prepare_request_without_sni_hostname() -> None:
    request = prepare_request(httpx.Request("GET", TEST_URL), "", None)

    assert "sni_hostname" not in request.extensions


####################################
#     Tests for HttpxRequester     #
####################################


def test_httpx_requester_is_requester() -> None:
    assert isinstance(HttpxRequester(Mock(spec=httpx.Client)), Requester)


def test_httpx_requester_execute() -> None:
    transport = httpx.MockTransport(echo_user_agent)
    with httpx.Client(transport=transport) as client:
        response = HttpxRequester(client, user_agent="test-agent").execute(
            httpx.Request("GET", TEST_URL)
        )

    assert response.status_code == 200
    assert response.json() == {"user-agent": "test-agent"}


def test_httpx_requester_execute_sends_with_client() -> None:
    client = Mock(spec=httpx.Client)
    request = httpx.Request("GET", TEST_URL)

    response = HttpxRequester(client).execute(request)

    client.send.assert_called_once_with(request)
    assert response is client.send.return_value


def test_httpx_requester_execute_transport_error() -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with (
        httpx.Client(transport=httpx.MockTransport(fail)) as client,
        pytest.raises(httpx.ConnectError, match=r"connection refused"),
    ):
        HttpxRequester(client).execute(httpx.Request("GET", TEST_URL))


#########################################
#     Tests for AsyncHttpxRequester     #
#########################################


def test_async_httpx_requester_is_async_requester() -> None:
    assert isinstance(AsyncHttpxRequester(Mock(spec=httpx.AsyncClient)), AsyncRequester)


@pytest.mark.asyncio
async def test_async_httpx_requester_execute() -> None:
    transport = httpx.MockTransport(echo_user_agent)
    async with httpx.AsyncClient(transport=transport) as client:
        response = await AsyncHttpxRequester(client, user_agent="test-agent").execute(
            httpx.Request("GET", TEST_URL)
        )

    assert response.status_code == 200
    assert response.json() == {"user-agent": "test-agent"}


@pytest.mark.asyncio
async def test_async_httpx_requester_execute_sets_sni_hostname() -> None:
    client = Mock(spec=httpx.AsyncClient, send=AsyncMock())
    request = httpx.Request("GET", TEST_URL)

    await AsyncHttpxRequester(client, tls_server_name="internal.example.com").execute(request)

    client.send.assert_awaited_once_with(request)
    assert request.extensions["sni_hostname"] == "internal.example.com"
