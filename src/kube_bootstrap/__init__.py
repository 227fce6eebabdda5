"""kube-bootstrap

Authenticated transport bootstrap for the Kubernetes REST API: a TLS context
trusting the cluster CA, a bearer token re-read from its file every minute,
and an httpx-based API client with JSON date/time support.
"""

from .auth import BearerTokenAuth, TokenFileAuth
from .client import ApiClient
from .config import Config, get_config, load_config
from .consts import PACKAGE_VERSION
from .exceptions import (
    ClientCreationError,
    ConfigError,
    KubeBootstrapError,
    TokenReadError,
)
from .factory import (
    create_client_with_cert_and_token,
    create_in_cluster_client,
    is_in_cluster,
)
from .models import ClientConfiguration, WatchEvent
from .tls import create_ssl_context

__version__ = PACKAGE_VERSION

__all__ = [
    "__version__",
    "get_config",
    "load_config",
    "create_client_with_cert_and_token",
    "create_in_cluster_client",
    "create_ssl_context",
    "is_in_cluster",
    "Config",
    "ApiClient",
    "ClientConfiguration",
    "WatchEvent",
    "BearerTokenAuth",
    "TokenFileAuth",
    "KubeBootstrapError",
    "ConfigError",
    "ClientCreationError",
    "TokenReadError",
]
