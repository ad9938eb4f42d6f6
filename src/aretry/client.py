r"""Synchronous client for resilient HTTP requests.

This module provides ``ResilientClient``, which owns an ``httpx.Client``
configured from a ``ClientConfig`` (timeout, TLS, transport) and sends
requests through a ``RetryExecutor``.
"""

from __future__ import annotations

__all__ = ["ResilientClient"]

import logging
from typing import TYPE_CHECKING

import httpx

from aretry.core.tls import build_ssl_context
from aretry.exceptions import ConfigError
from aretry.propagation import default_propagator, inject_trace_context
from aretry.requester import HttpxRequester
from aretry.retry.executor import RetryExecutor

if TYPE_CHECKING:
    import threading
    from types import TracebackType
    from typing import Self

    from opentelemetry.context import Context
    from opentelemetry.propagators.textmap import TextMapPropagator

    from aretry.core.config import ClientConfig
    from aretry.retry.manager import CallbackConfig
    from aretry.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class ResilientClient:
    r"""Synchronous client for resilient HTTP requests.

    The configuration is validated and the TLS context is built once, at
    construction. If ``client`` is given, it is used as is and the TLS,
    timeout and transport options are ignored.

    Args:
        config: The client configuration. ``base_url`` is required.
        client: Optional ``httpx.Client`` to send requests with.
        propagator: Optional trace context propagator. Defaults to a W3C
            Trace Context propagator.
        callback_config: Optional callbacks invoked by the retry loop.

    Raises:
        ConfigError: If the configuration is invalid or the TLS material
            cannot be loaded, or if the configured transport does not
            match the client.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry import ResilientClient
        >>> from aretry.core.config import ClientConfig
        >>> transport = httpx.MockTransport(lambda request: httpx.Response(200))
        >>> config = ClientConfig(base_url="https://api.example.com", transport=transport)
        >>> with ResilientClient(config) as client:
        ...     response = client.do_with_retry(httpx.Request("GET", "https://api.example.com/data"))
        ...
        >>> response.status_code
        200

        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        client: httpx.Client | None = None,
        propagator: TextMapPropagator | None = None,
        callback_config: CallbackConfig | None = None,
    ) -> None:
        config.validate()
        self._config = config
        self._owns_client = client is None
        self._client: httpx.Client = client or self._create_client(config)
        self._propagator = propagator if propagator is not None else default_propagator()
        self._executor = RetryExecutor(
            HttpxRequester(
                self._client,
                user_agent=config.user_agent,
                tls_server_name=config.tls_server_name,
            ),
            callback_config,
        )

    @staticmethod
    def _create_client(config: ClientConfig) -> httpx.Client:
        if config.transport is not None:
            if not isinstance(config.transport, httpx.BaseTransport):
                msg = (
                    "transport must be an httpx.BaseTransport, "
                    f"got {type(config.transport).__name__}"
                )
                raise ConfigError(msg)
            return httpx.Client(timeout=config.timeout, transport=config.transport)
        ssl_context = build_ssl_context(config)
        if ssl_context is not None:
            logger.debug(f"Creating TLS client for {config.base_url}")
            return httpx.Client(timeout=config.timeout, verify=ssl_context)
        return httpx.Client(timeout=config.timeout)

    def __enter__(self) -> Self:
        """Enter the context manager.

        The underlying ``httpx.Client`` is entered and later closed only
        if this client created it. A client passed by the caller is left
        to the caller.
        """
        if self._owns_client:
            self._client.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._owns_client:
            self._client.__exit__(exc_type, exc_val, exc_tb)

    def close(self) -> None:
        """Close the underlying ``httpx.Client`` if this client created
        it."""
        if self._owns_client:
            self._client.close()

    @property
    def base_url(self) -> str:
        """The base URL of the remote service."""
        return self._config.base_url

    @property
    def http_client(self) -> httpx.Client:
        """The underlying ``httpx.Client``."""
        return self._client

    @property
    def config(self) -> ClientConfig:
        """The client configuration."""
        return self._config

    def do(self, request: httpx.Request) -> httpx.Response:
        r"""Send a request once, without retry.

        Args:
            request: The prepared request.

        Returns:
            The response, whatever its status code.

        Raises:
            httpx.TransportError: If no response could be obtained.
        """
        return self._executor.requester.execute(request)

    def do_with_retry(
        self,
        request: httpx.Request,
        policy: RetryPolicy | None = None,
        cancel_event: threading.Event | None = None,
    ) -> httpx.Response:
        r"""Send a request with automatic retry logic.

        Args:
            request: The prepared request.
            policy: Optional retry policy. Defaults to the policy of the
                client configuration.
            cancel_event: Optional event signaling cancellation.

        Returns:
            The final response.

        Raises:
            NoAttemptsError: If the policy allows zero attempts.
            RequestFailedError: If a transport error occurs and the policy
                does not retry it.
            RetriesExhaustedError: If every allowed attempt failed.
            RequestCancelledError: If ``cancel_event`` is set during a
                backoff wait.
        """
        return self._executor.run(
            request,
            policy=policy if policy is not None else self._config.retry_policy,
            cancel_event=cancel_event,
        )

    def inject_trace_context(self, request: httpx.Request, context: Context | None = None) -> None:
        r"""Inject the trace context into the headers of a request.

        Args:
            request: The request to annotate in place.
            context: Optional context holding the span to propagate.
                Defaults to the current context.
        """
        inject_trace_context(request, self._propagator, context=context)
