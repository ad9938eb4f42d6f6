r"""Requesters performing a single HTTP request attempt.

A requester is the only collaborator the retry executors call to send a
request. It either returns a response or raises an
``httpx.TransportError`` when no response could be obtained. It never
retries by itself.
"""

from __future__ import annotations

__all__ = [
    "AsyncHttpxRequester",
    "AsyncRequester",
    "HttpxRequester",
    "Requester",
    "prepare_request",
]

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import httpx


@runtime_checkable
class Requester(Protocol):
    """Capability to perform one HTTP request synchronously."""

    def execute(self, request: httpx.Request) -> httpx.Response:
        """Send the request once.

        Args:
            request: The prepared request.

        Returns:
            The response, whatever its status code.

        Raises:
            httpx.TransportError: If no response could be obtained.
        """


@runtime_checkable
class AsyncRequester(Protocol):
    """Capability to perform one HTTP request asynchronously."""

    async def execute(self, request: httpx.Request) -> httpx.Response:
        """Send the request once.

        Args:
            request: The prepared request.

        Returns:
            The response, whatever its status code.

        Raises:
            httpx.TransportError: If no response could be obtained.
        """


def prepare_request(
    request: httpx.Request, user_agent: str, tls_server_name: str | None
) -> httpx.Request:
    r"""Apply the client-level defaults to a request.

    The ``User-Agent`` header is set only if the request has none, and
    the SNI hostname extension only if a TLS server name is configured.

    Args:
        request: The request to update in place.
        user_agent: The default user agent. Empty means none.
        tls_server_name: Optional server name for TLS verification.

    Returns:
        The same request.
    """
    if user_agent and "User-Agent" not in request.headers:
        request.headers["User-Agent"] = user_agent
    if tls_server_name:
        request.extensions["sni_hostname"] = tls_server_name
    return request


class HttpxRequester:
    r"""Requester sending requests through an ``httpx.Client``.

    Args:
        client: The client used to send requests. Its transport decides
            how requests are actually performed (default transport, TLS
            configured transport or ``httpx.MockTransport`` in tests).
        user_agent: Default ``User-Agent`` header value.
        tls_server_name: Optional server name for TLS verification.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry.requester import HttpxRequester
        >>> transport = httpx.MockTransport(lambda request: httpx.Response(200))
        >>> requester = HttpxRequester(httpx.Client(transport=transport), user_agent="aretry")
        >>> requester.execute(httpx.Request("GET", "https://api.example.com")).status_code
        200

        ```
    """

    def __init__(
        self,
        client: httpx.Client,
        user_agent: str = "",
        tls_server_name: str | None = None,
    ) -> None:
        self._client = client
        self._user_agent = user_agent
        self._tls_server_name = tls_server_name

    def execute(self, request: httpx.Request) -> httpx.Response:
        prepare_request(request, self._user_agent, self._tls_server_name)
        return self._client.send(request)


class AsyncHttpxRequester:
    r"""Requester sending requests through an ``httpx.AsyncClient``.

    Args:
        client: The async client used to send requests.
        user_agent: Default ``User-Agent`` header value.
        tls_server_name: Optional server name for TLS verification.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        user_agent: str = "",
        tls_server_name: str | None = None,
    ) -> None:
        self._client = client
        self._user_agent = user_agent
        self._tls_server_name = tls_server_name

    async def execute(self, request: httpx.Request) -> httpx.Response:
        prepare_request(request, self._user_agent, self._tls_server_name)
        return await self._client.send(request)
