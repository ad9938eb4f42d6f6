r"""TLS context construction for the resilient clients.

The SSL context is built once, when a client is created, and handed to
``httpx`` through its ``verify`` argument.
"""

from __future__ import annotations

__all__ = ["build_ssl_context"]

import logging
import ssl
from pathlib import Path
from typing import TYPE_CHECKING

from aretry.exceptions import ConfigError

if TYPE_CHECKING:
    from aretry.core.config import ClientConfig

logger: logging.Logger = logging.getLogger(__name__)


def build_ssl_context(config: ClientConfig) -> ssl.SSLContext | None:
    """Build the client SSL context described by a configuration.

    When ``tls_ca_cert_file`` is set, its certificates are the only trust
    anchors. Otherwise the system trust store is used. The client
    certificate is loaded only when both ``tls_client_cert`` and
    ``tls_client_key`` are set.

    Args:
        config: The client configuration.

    Returns:
        The SSL context, or ``None`` if no TLS option is set.

    Raises:
        ConfigError: If the CA certificate cannot be read or parsed, or
            if the client certificate cannot be loaded.

    Example:
        ```pycon
        >>> from aretry.core.config import ClientConfig
        >>> from aretry.core.tls import build_ssl_context
        >>> build_ssl_context(ClientConfig(base_url="https://api.example.com")) is None
        True
        >>> ctx = build_ssl_context(
        ...     ClientConfig(base_url="https://api.example.com", insecure_skip_verify=True)
        ... )
        >>> ctx.check_hostname
        False

        ```
    """
    if not config.uses_tls:
        return None

    ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    if config.insecure_skip_verify:
        logger.warning("TLS certificate verification is disabled")
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE

    if config.tls_ca_cert_file:
        try:
            ca_cert = Path(config.tls_ca_cert_file).read_text()
        except OSError as exc:
            msg = f"failed to read CA certificate: {exc}"
            raise ConfigError(msg) from exc
        try:
            ctx.load_verify_locations(cadata=ca_cert)
        except (ssl.SSLError, ValueError) as exc:
            msg = f"failed to parse CA certificate: {config.tls_ca_cert_file}"
            raise ConfigError(msg) from exc
    else:
        ctx.load_default_certs()

    if config.tls_client_cert and config.tls_client_key:
        try:
            ctx.load_cert_chain(config.tls_client_cert, config.tls_client_key)
        except (OSError, ssl.SSLError) as exc:
            msg = f"failed to load client certificate: {exc}"
            raise ConfigError(msg) from exc
    return ctx
