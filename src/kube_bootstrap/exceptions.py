"""kube-bootstrap custom exceptions.

Exception Design Principles:
1. Use these custom exceptions only when additional useful context can be provided
2. Always chain the underlying cause (``raise ... from e``)
3. Split on domain of actionable information:
   - Recoverable by fixing the pod/environment before start-up (ConfigError)
   - Construction of the client failed for any reason (ClientCreationError)
   - Credential became unreadable while the client was in use (TokenReadError)
"""


class KubeBootstrapError(Exception):
    """Base exception for all kube-bootstrap errors.

    Provides rich context and actionable suggestions beyond standard exceptions.
    All kube-bootstrap custom exceptions inherit from this base class.
    """

    def __init__(
        self,
        message: str,  # the error message
        *,
        errors: list[str] = None,  # detailed list of errors (if available)
        suggestions: list[str] = None,  # remedial actions
        context: dict = None,  # additional detailed context
    ):
        """Initialize KubeBootstrapError.

        Args:
            message: Primary error message for users
            errors: List of specific error details
            suggestions: List of actionable suggestions for resolution
            context: Additional context information as key-value pairs
        """
        super().__init__(message)
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.context = context or {}


class ConfigError(KubeBootstrapError):
    """Environment configuration errors - fatal, raised before any file access.

    Covers setup issues that can only be resolved by fixing the runtime
    environment of the process:
    - KUBERNETES_SERVICE_HOST / KUBERNETES_SERVICE_PORT unset or empty
    - A service port that is not a number
    - An invalid KUBE_BOOTSTRAP_* setting
    """

    pass


class ClientCreationError(KubeBootstrapError):
    """The API client could not be constructed.

    Single wrapped error kind for every construction-time failure:
    - CA certificate file missing or unreadable
    - CA certificate malformed, or rejected by the TLS library
    - Host/port that do not form a valid https URL

    The original exception is always available as ``__cause__``.
    """

    pass


class TokenReadError(KubeBootstrapError):
    """The bearer token file could not be read while refreshing the cache.

    Raised from inside the request authentication flow, so the in-flight
    request is aborted instead of being sent with a stale or missing token.
    """

    pass
