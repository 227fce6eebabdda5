"""Kubernetes API client, handles low-level API calls."""

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from .consts import JSON_CONTENT_TYPE, PATCH_CONTENT_TYPES
from .models import ClientConfiguration, WatchEvent
from .serialization import dumps, loads

logger = logging.getLogger("kube-bootstrap.client")


def create_transport(configuration: ClientConfiguration) -> httpx.AsyncHTTPTransport:
    """Create the connection transport for an API client.

    Always built explicitly: HTTP/1.1 only, no connection retries, and the
    cluster TLS context instead of the system trust store.
    """
    return httpx.AsyncHTTPTransport(
        verify=configuration.ssl_context,
        http1=True,
        http2=False,
        retries=0,
    )


class ApiClient:
    """Authenticated client for the Kubernetes REST API.

    Responsibilities:
    - Provide JSON request helpers relative to the API server base URL
    - Encode bodies with date/time support and pick PATCH content types
    - Stream watch events
    """

    def __init__(
        self,
        configuration: ClientConfiguration,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize ApiClient.

        Args:
            configuration: Frozen client configuration from the assembler.
            transport: Connection transport. If None, uses create_transport().
        """
        self.configuration = configuration
        self.http_client = httpx.AsyncClient(
            base_url=configuration.base_url,
            auth=configuration.auth,
            timeout=configuration.timeout,
            headers={
                "User-Agent": configuration.user_agent,
                "Accept": JSON_CONTENT_TYPE,
            },
            transport=transport or create_transport(configuration),
        )

    @property
    def base_url(self) -> str:
        return self.configuration.base_url

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close pooled connections."""
        await self.http_client.aclose()
        logger.debug(f"Client for {self.base_url} closed")

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> httpx.Response:
        """Send an authenticated request.

        Args:
            method: HTTP verb.
            path: Path relative to the base URL, e.g. ``/api/v1/namespaces``.
            body: Object to encode as JSON, or None for no body.
            params: Query parameters.
            headers: Extra headers.
            content_type: Content-Type used when a body is sent.

        Returns:
            The response, after a successful status check.

        Raises:
            TokenReadError: If the bearer token could not be refreshed.
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses.
            httpx.RequestError: For network errors, TLS failures, DNS failures.
        """
        headers = dict(headers or {})
        content = None
        if body is not None:
            content = dumps(body)
            headers["Content-Type"] = content_type

        logger.debug(f"{method} {path}")
        response = await self.http_client.request(
            method, path, content=content, params=params, headers=headers
        )
        response.raise_for_status()
        logger.debug(f"{method} {path} successful")
        return response

    async def _request_json(self, method: str, path: str, into: Any, **kwargs) -> Any:
        response = await self.request(method, path, **kwargs)
        if not response.content:
            return None
        return loads(response.content, into)

    async def get_json(
        self, path: str, *, params: dict[str, Any] | None = None, into: Any = None
    ) -> Any:
        """GET a resource and decode the JSON body (optionally into ``into``)."""
        return await self._request_json("GET", path, into, params=params)

    async def post_json(
        self,
        path: str,
        body: Any,
        *,
        params: dict[str, Any] | None = None,
        into: Any = None,
    ) -> Any:
        """POST a JSON body and decode the JSON response."""
        return await self._request_json("POST", path, into, body=body, params=params)

    async def put_json(
        self,
        path: str,
        body: Any,
        *,
        params: dict[str, Any] | None = None,
        into: Any = None,
    ) -> Any:
        """PUT (replace) a resource and decode the JSON response."""
        return await self._request_json("PUT", path, into, body=body, params=params)

    async def patch_json(
        self,
        path: str,
        body: Any,
        *,
        patch_type: str = "merge",
        params: dict[str, Any] | None = None,
        into: Any = None,
    ) -> Any:
        """PATCH a resource.

        Args:
            path: Resource path.
            body: Patch document.
            patch_type: One of ``merge``, ``json``, ``strategic`` or ``apply``.
                Server-side apply also needs a ``fieldManager`` query param.
            params: Query parameters.
            into: Optional target type for the response.

        Raises:
            ValueError: If patch_type is unknown.
        """
        content_type = PATCH_CONTENT_TYPES.get(patch_type)
        if content_type is None:
            raise ValueError(
                f"Unknown patch type '{patch_type}', expected one of "
                f"{sorted(PATCH_CONTENT_TYPES)}"
            )
        return await self._request_json(
            "PATCH",
            path,
            into,
            body=body,
            params=params,
            content_type=content_type,
        )

    async def delete_json(
        self,
        path: str,
        *,
        body: Any = None,
        params: dict[str, Any] | None = None,
        into: Any = None,
    ) -> Any:
        """DELETE a resource, optionally sending DeleteOptions as the body."""
        return await self._request_json(
            "DELETE", path, into, body=body, params=params
        )

    async def watch(
        self, path: str, *, params: dict[str, Any] | None = None
    ) -> AsyncIterator[WatchEvent]:
        """Stream watch events for a collection.

        The read timeout is unbounded, so the stream stays open until the
        server ends it or the caller stops iterating.

        Args:
            path: Collection path, e.g. ``/api/v1/namespaces/default/pods``.
            params: Extra query parameters (``resourceVersion``,
                ``labelSelector``...). ``watch=true`` is always added.

        Yields:
            WatchEvent for each non-empty line of the response.
        """
        params = {**(params or {}), "watch": "true"}
        logger.debug(f"WATCH {path}")
        async with self.http_client.stream("GET", path, params=params) as response:
            response.raise_for_status()
            async for line in response.aiter_lines():
                if line.strip():
                    yield loads(line, WatchEvent)

