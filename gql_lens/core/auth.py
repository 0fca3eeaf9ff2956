"""Authentication handlers for introspection requests.

Provides pluggable authentication via the Auth protocol.
Users can implement custom auth or use built-in handlers.
"""

import json
from typing import Dict, Protocol, runtime_checkable


@runtime_checkable
class Auth(Protocol):
    """Protocol for authentication handlers.

    Example:
        class TenantAuth:
            def __init__(self, token: str, tenant: str):
                self.token = token
                self.tenant = tenant

            def get_headers(self) -> dict[str, str]:
                return {
                    "Authorization": f"Bearer {self.token}",
                    "X-Tenant": self.tenant,
                }
    """

    def get_headers(self) -> Dict[str, str]:
        """Return headers to include in requests."""
        ...


class ApiKeyAuth:
    """API key authentication via a custom header.

    Args:
        api_key: The API key value
        header_name: Header name (default: "x-api-key")
    """

    def __init__(self, api_key: str, header_name: str = "x-api-key"):
        self.api_key = api_key
        self.header_name = header_name

    def get_headers(self) -> Dict[str, str]:
        return {self.header_name: self.api_key}


class BearerAuth:
    """Bearer token authentication."""

    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class HeaderAuth:
    """Arbitrary extra headers.

    Example:
        auth = HeaderAuth.from_json('{"X-API-Key": "key123"}')
    """

    def __init__(self, headers: Dict[str, str]):
        self._headers = headers

    @classmethod
    def from_json(cls, text: str | None) -> "HeaderAuth":
        """Build from a JSON object string, as found in GRAPHQL_API_HEADERS.

        Raises:
            ValueError: If the text is not a JSON object of strings.
        """
        if not text or not text.strip():
            return cls({})
        try:
            headers = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Headers must be a JSON object: {e}") from e
        if not isinstance(headers, dict):
            raise ValueError("Headers must be a JSON object")
        return cls({str(k): str(v) for k, v in headers.items()})

    def get_headers(self) -> Dict[str, str]:
        return self._headers.copy()


class NoAuth:
    """No authentication (for public APIs or testing)."""

    def get_headers(self) -> Dict[str, str]:
        return {}
