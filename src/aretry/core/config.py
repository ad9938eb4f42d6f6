r"""Configuration dataclass and defaults for the resilient clients.

This module provides configuration constants and a dataclass-based
configuration object for ``ResilientClient`` and
``AsyncResilientClient``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_MULTIPLIER",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MAX_RETRY_DELAY",
    "DEFAULT_RETRY_DELAY",
    "DEFAULT_TIMEOUT",
    "RETRY_STATUS_CODES",
    "ClientConfig",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aretry.core.validation import validate_timeout
from aretry.exceptions import ConfigError

if TYPE_CHECKING:
    import httpx

    from aretry.retry.policy import RetryPolicy


# Default timeout in seconds for a single HTTP request
DEFAULT_TIMEOUT = 10.0

# Default maximum number of retry attempts
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Base unit of the backoff delay, in seconds
DEFAULT_RETRY_DELAY = 0.1

# Hard ceiling for a single backoff delay, in seconds
DEFAULT_MAX_RETRY_DELAY = 2.0

# Delay before retry n (0-indexed) = retry_delay * (n + 1) * multiplier
# With the defaults: 0.2s, 0.4s, 0.6s
DEFAULT_BACKOFF_MULTIPLIER = 2.0

# HTTP status codes that should trigger automatic retry
# 408: Request Timeout
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (408, 429, 500, 502, 503, 504)


def _default_retry_policy() -> RetryPolicy:
    from aretry.retry.policy import RetryPolicy

    return RetryPolicy()


@dataclass
class ClientConfig:
    """Configuration for ``ResilientClient`` and ``AsyncResilientClient``.

    The TLS options are only used when the client creates its own
    ``httpx`` client and no custom ``transport`` is given.

    Args:
        base_url: The base URL of the remote service. Required.
        timeout: Maximum seconds to wait for a single request. Must be > 0.
        user_agent: Value of the ``User-Agent`` header added to requests
            that do not set one. Empty means no header is added.
        transport: Optional custom ``httpx`` transport. Takes precedence
            over the TLS options. Must be an ``httpx.BaseTransport``
            for ``ResilientClient`` and an ``httpx.AsyncBaseTransport``
            for ``AsyncResilientClient``.
        tls_ca_cert_file: Optional PEM file used as the only trust store
            to verify the server certificate.
        tls_client_cert: Optional client certificate file for mTLS.
        tls_client_key: Optional client private key file for mTLS.
        tls_server_name: Optional server name used for TLS verification
            (SNI) instead of the URL host.
        insecure_skip_verify: Skip server certificate verification.
            Not recommended.
        retry_policy: Retry policy used by ``do_with_retry`` when no
            policy is passed explicitly.

    Example:
        ```pycon
        >>> from aretry.core.config import ClientConfig
        >>> config = ClientConfig(base_url="https://api.example.com")
        >>> config.timeout
        10.0
        >>> config.retry_policy.max_retries
        3
        >>> merged = config.merge(timeout=30.0)
        >>> merged.timeout
        30.0
        >>> config.timeout  # unchanged
        10.0

        ```
    """

    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = ""
    transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None
    tls_ca_cert_file: str | None = None
    tls_client_cert: str | None = None
    tls_client_key: str | None = None
    tls_server_name: str | None = None
    insecure_skip_verify: bool = False
    retry_policy: RetryPolicy = field(default_factory=_default_retry_policy)

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ConfigError: If ``base_url`` is empty or ``timeout`` is not
                positive.

        Example:
            ```pycon
            >>> from aretry.core.config import ClientConfig
            >>> ClientConfig(base_url="https://api.example.com").validate()
            >>> ClientConfig().validate()
            Traceback (most recent call last):
                ...
            aretry.exceptions.ConfigError: base URL is required

            ```
        """
        if not self.base_url:
            msg = "base URL is required"
            raise ConfigError(msg)
        validate_timeout(self.timeout)

    @property
    def uses_tls(self) -> bool:
        """Indicate whether any TLS option is set."""
        return bool(self.tls_ca_cert_file or self.tls_client_cert or self.insecure_skip_verify)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary.

        Returns:
            Dictionary with the configuration parameters.
        """
        return {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "user_agent": self.user_agent,
            "transport": self.transport,
            "tls_ca_cert_file": self.tls_ca_cert_file,
            "tls_client_cert": self.tls_client_cert,
            "tls_client_key": self.tls_client_key,
            "tls_server_name": self.tls_server_name,
            "insecure_skip_verify": self.insecure_skip_verify,
            "retry_policy": self.retry_policy,
        }
