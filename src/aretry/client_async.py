r"""Asynchronous client for resilient HTTP requests.

This module provides ``AsyncResilientClient``, the asynchronous
counterpart of ``ResilientClient`` built on ``httpx.AsyncClient`` and
``AsyncRetryExecutor``.
"""

from __future__ import annotations

__all__ = ["AsyncResilientClient"]

import logging
from typing import TYPE_CHECKING

import httpx

from aretry.core.tls import build_ssl_context
from aretry.exceptions import ConfigError
from aretry.propagation import default_propagator, inject_trace_context
from aretry.requester import AsyncHttpxRequester
from aretry.retry.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    import asyncio
    from types import TracebackType
    from typing import Self

    from opentelemetry.context import Context
    from opentelemetry.propagators.textmap import TextMapPropagator

    from aretry.core.config import ClientConfig
    from aretry.retry.manager import CallbackConfig
    from aretry.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class AsyncResilientClient:
    r"""Asynchronous client for resilient HTTP requests.

    Args:
        config: The client configuration. ``base_url`` is required.
        client: Optional ``httpx.AsyncClient`` to send requests with.
        propagator: Optional trace context propagator. Defaults to a W3C
            Trace Context propagator.
        callback_config: Optional callbacks invoked by the retry loop.

    Raises:
        ConfigError: If the configuration is invalid or the TLS material
            cannot be loaded, or if the configured transport does not
            match the client.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from aretry import AsyncResilientClient
        >>> from aretry.core.config import ClientConfig
        >>>
        >>> async def main():
        ...     transport = httpx.MockTransport(lambda request: httpx.Response(200))
        ...     config = ClientConfig(base_url="https://api.example.com", transport=transport)
        ...     async with AsyncResilientClient(config) as client:
        ...         response = await client.do_with_retry(
        ...             httpx.Request("GET", "https://api.example.com/data")
        ...         )
        ...     return response.status_code
        ...
        >>> asyncio.run(main())
        200

        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        client: httpx.AsyncClient | None = None,
        propagator: TextMapPropagator | None = None,
        callback_config: CallbackConfig | None = None,
    ) -> None:
        config.validate()
        self._config = config
        self._owns_client = client is None
        self._client: httpx.AsyncClient = client or self._create_client(config)
        self._propagator = propagator if propagator is not None else default_propagator()
        self._executor = AsyncRetryExecutor(
            AsyncHttpxRequester(
                self._client,
                user_agent=config.user_agent,
                tls_server_name=config.tls_server_name,
            ),
            callback_config,
        )

    @staticmethod
    def _create_client(config: ClientConfig) -> httpx.AsyncClient:
        if config.transport is not None:
            if not isinstance(config.transport, httpx.AsyncBaseTransport):
                msg = (
                    "transport must be an httpx.AsyncBaseTransport, "
                    f"got {type(config.transport).__name__}"
                )
                raise ConfigError(msg)
            return httpx.AsyncClient(timeout=config.timeout, transport=config.transport)
        ssl_context = build_ssl_context(config)
        if ssl_context is not None:
            logger.debug(f"Creating TLS async client for {config.base_url}")
            return httpx.AsyncClient(timeout=config.timeout, verify=ssl_context)
        return httpx.AsyncClient(timeout=config.timeout)

    async def __aenter__(self) -> Self:
        """Enter the async context manager.

        The underlying ``httpx.AsyncClient`` is entered and later closed
        only if this client created it.
        """
        if self._owns_client:
            await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._owns_client:
            await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        """Close the underlying ``httpx.AsyncClient`` if this client
        created it."""
        if self._owns_client:
            await self._client.aclose()

    @property
    def base_url(self) -> str:
        """The base URL of the remote service."""
        return self._config.base_url

    @property
    def http_client(self) -> httpx.AsyncClient:
        """The underlying ``httpx.AsyncClient``."""
        return self._client

    @property
    def config(self) -> ClientConfig:
        """The client configuration."""
        return self._config

    async def do(self, request: httpx.Request) -> httpx.Response:
        r"""Send a request once, without retry.

        Args:
            request: The prepared request.

        Returns:
            The response, whatever its status code.

        Raises:
            httpx.TransportError: If no response could be obtained.
        """
        return await self._executor.requester.execute(request)

    async def do_with_retry(
        self,
        request: httpx.Request,
        policy: RetryPolicy | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> httpx.Response:
        r"""Send a request with automatic retry logic.

        See ``ResilientClient.do_with_retry`` for the semantics.

        Args:
            request: The prepared request.
            policy: Optional retry policy. Defaults to the policy of the
                client configuration.
            cancel_event: Optional event signaling cancellation.

        Returns:
            The final response.
        """
        return await self._executor.run(
            request,
            policy=policy if policy is not None else self._config.retry_policy,
            cancel_event=cancel_event,
        )

    def inject_trace_context(self, request: httpx.Request, context: Context | None = None) -> None:
        r"""Inject the trace context into the headers of a request.

        Args:
            request: The request to annotate in place.
            context: Optional context holding the span to propagate.
        """
        inject_trace_context(request, self._propagator, context=context)
