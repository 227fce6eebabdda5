import ssl
from typing import Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, computed_field

from .consts import USER_AGENT

# =============================================================================
# CLIENT CONFIGURATION
# =============================================================================
# Everything the assembler decided, frozen once the client is built


class ClientConfiguration(BaseModel):
    """Immutable description of an assembled API client."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str = Field(..., description="https://{host}:{port}")
    ssl_context: ssl.SSLContext = Field(
        ..., description="TLS context trusting only the cluster CA"
    )
    auth: httpx.Auth = Field(
        ..., description="Request interceptor injecting the bearer token"
    )
    timeout: httpx.Timeout = Field(
        ..., description="HTTP timeouts; read is None for watch streams"
    )
    user_agent: str = Field(USER_AGENT, description="User-Agent header value")

    @computed_field
    @property
    def check_hostname(self) -> bool:
        """Whether the TLS context verifies the server hostname."""
        return self.ssl_context.check_hostname


# =============================================================================
# WATCH EVENTS
# =============================================================================


class WatchEvent(BaseModel):
    """One line of a Kubernetes ``?watch=true`` stream."""

    type: Literal["ADDED", "MODIFIED", "DELETED", "BOOKMARK", "ERROR"]
    object: dict[str, Any] = Field(
        default_factory=dict, description="The changed object, or a Status on ERROR"
    )
