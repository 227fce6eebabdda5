"""Assemble an authenticated Kubernetes API client from a CA cert and token file."""

import logging
import os
from pathlib import Path

import httpx

from .auth import TokenFileAuth
from .client import ApiClient, create_transport
from .config import Config, load_config
from .consts import ENV_SERVICE_HOST, ENV_SERVICE_PORT, USER_AGENT
from .exceptions import ClientCreationError, ConfigError
from .models import ClientConfiguration
from .tls import create_ssl_context

logger = logging.getLogger("kube-bootstrap.factory")

DEFAULT_CONNECT_TIMEOUT_SECONDS = 30.0


def build_base_url(host: str, port: int) -> str:
    """Build ``https://{host}:{port}`` for the API server.

    IPv6 literals are bracketed. The explicit port is always kept, even 443.

    Raises:
        ClientCreationError: If host or port cannot form a valid URL.
    """
    context = {"host": host, "port": port}
    if not host or any(c.isspace() or c in "/?#@" for c in host):
        raise ClientCreationError(f"Invalid API server host: {host!r}", context=context)
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        raise ClientCreationError(f"Invalid API server port: {port!r}", context=context)

    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    base_url = f"https://{host}:{port}"

    try:
        httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise ClientCreationError(
            f"Invalid API server URL: {base_url}", errors=[str(e)], context=context
        ) from e
    return base_url


def create_client_with_cert_and_token(
    ca_cert_path: str | Path,
    token_path: str | Path,
    host: str,
    port: int,
    *,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApiClient:
    """Create a Kubernetes client with a CA cert and Bearer token.

    The returned client trusts only the given CA, checks the server hostname,
    sends ``Authorization: Bearer <token>`` on every request (re-reading the
    token file at most once a minute) and never times out on reads, so watch
    requests can stay open.

    Args:
        ca_cert_path: PEM or DER encoded cluster CA certificate.
        token_path: Plain-text bearer token file.
        host: API server host name or IP address.
        port: API server port.
        connect_timeout: Connect/write/pool timeout in seconds.
        transport: Connection transport override. If None, an explicit
            HTTP/1.1 transport bound to the CA is created.

    Returns:
        Configured ApiClient.

    Raises:
        ClientCreationError: If the client could not be created for any reason.
    """
    try:
        ssl_context = create_ssl_context(ca_cert_path)
        base_url = build_base_url(host, port)
    except ClientCreationError as e:
        logger.error(f"Failed to create Kubernetes client: {e.message}")
        raise

    configuration = ClientConfiguration(
        base_url=base_url,
        ssl_context=ssl_context,
        auth=TokenFileAuth(token_path),
        timeout=httpx.Timeout(connect_timeout, read=None),
        user_agent=USER_AGENT,
    )
    client = ApiClient(
        configuration, transport=transport or create_transport(configuration)
    )

    logger.info(f"Kubernetes client created for {base_url}")
    return client


def _require_env(name: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise ConfigError(
            f"Environment variable not set: {name}",
            suggestions=[
                "Run inside a Kubernetes pod, or export the variable explicitly"
            ],
            context={"variable": name},
        )
    return value.strip()


def create_in_cluster_client(config: Config | None = None) -> ApiClient:
    """Create a Kubernetes client from the pod's service-account mount.

    Reads KUBERNETES_SERVICE_HOST and KUBERNETES_SERVICE_PORT and uses the
    standard service-account CA certificate and token paths (overridable
    through Config).

    Args:
        config: Config instance. If None, a fresh Config() is loaded so the
            current environment is used.

    Returns:
        Configured ApiClient.

    Raises:
        ConfigError: If either environment variable is missing, empty or the
            port is not a number, or another setting in the environment is
            invalid. Raised before any file is touched.
        ClientCreationError: If the client could not be created for any reason.
    """
    config = config or load_config()

    host = _require_env(ENV_SERVICE_HOST, config.service_host)
    raw_port = _require_env(ENV_SERVICE_PORT, config.service_port)
    try:
        port = int(raw_port)
    except ValueError as e:
        raise ConfigError(
            f"Environment variable is not a port number: {ENV_SERVICE_PORT}={raw_port!r}",
            context={"variable": ENV_SERVICE_PORT, "value": raw_port},
        ) from e

    return create_client_with_cert_and_token(
        config.ca_cert_path,
        config.token_path,
        host,
        port,
        connect_timeout=config.connect_timeout_seconds,
    )


def is_in_cluster(config: Config | None = None) -> bool:
    """Detect if running inside a Kubernetes pod."""
    config = config or load_config()
    return (
        bool(config.service_host)
        and bool(config.service_port)
        and os.path.isfile(config.token_path)
    )
