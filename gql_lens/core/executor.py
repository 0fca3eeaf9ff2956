"""GraphQL executor for running queries against a GraphQL endpoint.

Handles HTTP communication, error handling, and response parsing. Its main
job here is fetching the introspection document that the compressor and the
lookup index consume.
"""

import logging
from typing import Any

import httpx
from graphql import get_introspection_query

from .auth import Auth, NoAuth
from .errors import GqlLensError

logger = logging.getLogger(__name__)


class GraphQLError(GqlLensError):
    """Exception raised for GraphQL errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]]):
        self.message = message
        self.errors = errors
        super().__init__(message)


class GraphQLExecutor:
    """Executes GraphQL operations against an endpoint.

    Examples:
        executor = GraphQLExecutor(url, auth=BearerAuth(token))
        schema = await executor.introspect()
        await executor.close()
    """

    def __init__(
        self,
        url: str,
        auth: Auth | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the executor.

        Args:
            url: GraphQL endpoint URL
            auth: Authentication handler (implements Auth protocol)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.url = url
        self.timeout = timeout
        self._auth = auth or NoAuth()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            headers.update(self._auth.get_headers())

            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GraphQLExecutor":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a raw GraphQL query.

        Returns:
            The 'data' portion of the response

        Raises:
            GraphQLError: If the response contains errors
            httpx.HTTPStatusError: On a non-2xx response
        """
        client = await self._get_client()

        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        logger.debug("POST %s", self.url)
        response = await client.post(self.url, json=payload)
        response.raise_for_status()

        result = response.json()

        if result.get("errors"):
            error_messages = "; ".join(e.get("message", str(e)) for e in result["errors"])
            raise GraphQLError(f"GraphQL errors: {error_messages}", result["errors"])

        return result.get("data") or {}

    async def introspect(self, descriptions: bool = True) -> dict[str, Any]:
        """Run the standard introspection query.

        Returns:
            The introspection envelope, ``{"__schema": {...}}``

        Raises:
            GraphQLError: If the endpoint returns errors or no ``__schema``
        """
        data = await self.execute(get_introspection_query(descriptions=descriptions))
        if not data.get("__schema"):
            raise GraphQLError("Introspection response has no __schema", [])
        logger.info("Fetched introspection with %d types", len(data["__schema"].get("types") or []))
        return {"__schema": data["__schema"]}
