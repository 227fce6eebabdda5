"""Bearer token authentication with periodic re-read of the token file."""

import logging
import threading
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import httpx

from .consts import TOKEN_REFRESH_SECONDS
from .exceptions import TokenReadError
from .protocols import TokenProvider

logger = logging.getLogger("kube-bootstrap.auth")

NEVER = datetime.min.replace(tzinfo=UTC)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BearerTokenAuth(httpx.Auth):
    """Request interceptor that sets ``Authorization: Bearer <token>``.

    The token is looked up for every request, so a provider that refreshes
    its credential is picked up without rebuilding the client.
    """

    def __init__(self, token_provider: TokenProvider):
        """Initialize BearerTokenAuth.

        Args:
            token_provider: Source of the token sent with each request.
        """
        self.token_provider = token_provider

    def get_token(self) -> str:
        """Return the token to send with the next request."""
        return self.token_provider.get_token()

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.get_token()}"
        yield request


class TokenFileAuth(BearerTokenAuth):
    """Bearer token read from a file and cached for a fixed window.

    Responsibilities:
    - Hold the credential cache (token, expiry) for one HTTP client
    - Re-read the file once the cache has expired
    - Refuse to serve a stale token when the re-read fails
    """

    def __init__(self, token_path: str | Path):
        """Initialize TokenFileAuth.

        Args:
            token_path: Path to a plain-text file holding the bearer token.
        """
        super().__init__(token_provider=self)  # serves its own cached token
        self.token_path = Path(token_path)
        self._token: str | None = None
        self._expires_at = NEVER  # forces a read on first use
        self._lock = threading.Lock()

    @property
    def expires_at(self) -> datetime:
        """Instant after which the cached token is re-read."""
        return self._expires_at

    def get_token(self) -> str:
        """Get a valid bearer token, re-reading the file if the cache expired.

        Returns:
            Token file contents with surrounding whitespace stripped.

        Raises:
            TokenReadError: If the file cannot be read once the cache has
                expired. The previously cached token is never returned.
        """
        with self._lock:
            now = _utcnow()
            if now >= self._expires_at:
                self._token = self._read_token_file()
                self._expires_at = now + timedelta(seconds=TOKEN_REFRESH_SECONDS)
            return self._token

    def invalidate(self) -> None:
        """Expire the cached token so the next request re-reads the file."""
        with self._lock:
            self._expires_at = NEVER

    def _read_token_file(self) -> str:
        logger.debug(f"Reading bearer token from {self.token_path}")
        try:
            return self.token_path.read_text().strip()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read token file {self.token_path}: {e}")
            raise TokenReadError(
                f"Cannot read token file: {self.token_path}",
                errors=[str(e)],
                suggestions=[
                    "Check that the service account token is mounted",
                    "Check file permissions",
                ],
                context={"token_path": str(self.token_path)},
            ) from e
