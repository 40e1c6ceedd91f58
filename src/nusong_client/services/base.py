"""Base HTTP client for the NuSong REST backend."""

from collections.abc import Iterable
from typing import Any, Protocol

import httpx


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(APIError):
    """Raised when the request never produced a response (timeout, connection)."""


class RateLimitError(APIError):
    """Raised when API rate limit is exceeded."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int | None = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class NotFoundError(APIError):
    """Raised when a resource is not found."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class AuthenticationError(APIError):
    """Raised when the session is missing, expired or not allowed."""

    def __init__(self, message: str = "Unauthorized", status_code: int = 401):
        super().__init__(message, status_code=status_code)


class QuotaExceededError(APIError):
    """Raised when the user's plan does not allow another generation."""

    def __init__(
        self,
        message: str = (
            "You have reached your generation limit. "
            "Please upgrade your plan to continue."
        ),
    ):
        super().__init__(message, status_code=403)


class ValidationError(APIError):
    """Raised when the backend rejects a request body (400/422)."""

    def __init__(
        self,
        message: str = "Invalid request",
        status_code: int = 400,
        errors: dict[str, str] | None = None,
    ):
        super().__init__(message, status_code=status_code)
        self.errors = errors or {}


class ResponseInterceptor(Protocol):
    """Sees every backend response before the default handling.

    Implementations raise to replace the default error for a response and
    return normally to let default handling continue.
    """

    def on_response(self, response: httpx.Response) -> None: ...


def error_message(response: httpx.Response) -> str:
    """Extract the human-readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text

    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.text


def _field_errors(response: httpx.Response) -> dict[str, str]:
    """Collect per-field errors from a validation response.

    Accepts either {"errors": {"field": "msg"}} or a list of issues shaped
    like {"path": ["field"], "message": "msg"}.
    """
    try:
        body = response.json()
    except ValueError:
        return {}
    if not isinstance(body, dict):
        return {}

    errors = body.get("errors")
    if isinstance(errors, dict):
        return {str(k): str(v) for k, v in errors.items()}

    result: dict[str, str] = {}
    if isinstance(errors, list):
        for issue in errors:
            if not isinstance(issue, dict):
                continue
            path = issue.get("path") or ["__root__"]
            field = ".".join(str(p) for p in path)
            result.setdefault(field, str(issue.get("message", "Invalid value")))
    return result


class BaseAPIClient:
    """HTTP client for the backend REST API.

    Provides common functionality for JSON requests, session cookies,
    error handling and response interception.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        interceptors: Iterable[ResponseInterceptor] = (),
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the base API client.

        Args:
            base_url: The backend origin.
            timeout: Request timeout in seconds.
            interceptors: Response interceptors run in order for every API response.
            transport: Optional httpx transport (in-process apps, mocks).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.interceptors: list[ResponseInterceptor] = list(interceptors)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers for API requests."""
        return {"Accept": "application/json"}

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.default_headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        client = await self._get_client()
        try:
            return await client.request(method=method, url=url, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}") from e

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make a JSON request to the API.

        Args:
            method: HTTP method (GET, POST, etc.).
            endpoint: API endpoint path.
            params: Query parameters.
            json: JSON request body.
            headers: Additional headers to include.

        Returns:
            Decoded JSON body, or None for empty responses.

        Raises:
            AuthenticationError: Raised by the auth interceptor on 401/403.
            NotFoundError: If the resource is not found (404).
            RateLimitError: If rate limit is exceeded (429).
            ValidationError: If the request body was rejected (400/422).
            TransportError: If no response was received.
            APIError: For other HTTP errors.
        """
        url = "/" + endpoint.lstrip("/")

        kwargs: dict[str, Any] = {"params": params, "headers": headers}
        if json is not None:
            kwargs["json"] = json

        response = await self._send(method, url, **kwargs)

        for interceptor in self.interceptors:
            interceptor.on_response(response)

        return self._handle_response(response)

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise the matching exception for an error status."""
        if response.status_code < 400:
            return

        message = error_message(response)

        if response.status_code in (401, 403):
            raise AuthenticationError(message or "Unauthorized", status_code=response.status_code)

        if response.status_code == 404:
            raise NotFoundError(message or "Resource not found")

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                message or "Rate limit exceeded",
                retry_after=int(retry_after) if retry_after else None,
            )

        if response.status_code in (400, 422):
            raise ValidationError(
                message or "Invalid request",
                status_code=response.status_code,
                errors=_field_errors(response),
            )

        raise APIError(
            f"API error: {message}",
            status_code=response.status_code,
        )

    def _handle_response(self, response: httpx.Response) -> Any:
        """Handle the HTTP response.

        Args:
            response: The HTTP response object.

        Returns:
            JSON response, or None when the body is empty.
        """
        self._raise_for_status(response)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON response: {e}") from e

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make a GET request to the API."""
        return await self._request("GET", endpoint, params=params, headers=headers)

    async def post(
        self,
        endpoint: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a POST request to the API."""
        return await self._request("POST", endpoint, params=params, json=json)

    async def put(self, endpoint: str, json: Any = None) -> Any:
        """Make a PUT request to the API."""
        return await self._request("PUT", endpoint, json=json)

    async def patch(self, endpoint: str, json: Any = None) -> Any:
        """Make a PATCH request to the API."""
        return await self._request("PATCH", endpoint, json=json)

    async def delete(self, endpoint: str) -> Any:
        """Make a DELETE request to the API."""
        return await self._request("DELETE", endpoint)

    async def put_bytes(self, url: str, data: bytes, content_type: str) -> None:
        """PUT a raw body to an absolute URL such as a signed upload target."""
        response = await self._send(
            "PUT", url, content=data, headers={"Content-Type": content_type}
        )
        self._raise_for_status(response)

    async def get_bytes(self, url: str) -> bytes:
        """GET raw content from a path or absolute URL."""
        response = await self._send("GET", url)
        for interceptor in self.interceptors:
            interceptor.on_response(response)
        self._raise_for_status(response)
        return response.content

    async def __aenter__(self) -> "BaseAPIClient":
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
