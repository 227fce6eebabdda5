"""Protocol definitions for dependency injection and interface contracts."""

from typing import Protocol


class TokenProvider(Protocol):
    """Protocol for bearer token providers."""

    def get_token(self) -> str:
        """Get a valid bearer token.

        Called once per outgoing request, so implementations must be cheap
        when the token is already cached.

        Returns:
            Valid bearer token string.

        Raises:
            TokenReadError: If the token cannot be obtained.
        """
        ...
