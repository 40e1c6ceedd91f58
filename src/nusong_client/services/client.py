"""Session-authenticated client for the NuSong backend."""

from collections.abc import Iterable

import httpx

from nusong_client import __version__
from nusong_client.config import get_settings
from nusong_client.services.base import BaseAPIClient, ResponseInterceptor


class NuSongClient(BaseAPIClient):
    """Client for the NuSong REST API.

    Authentication is a session cookie set by the login endpoints and kept
    by the underlying httpx client for every later request.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        interceptors: Iterable[ResponseInterceptor] = (),
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the NuSong client.

        Args:
            base_url: Backend origin. If not provided, uses settings.
            timeout: Request timeout in seconds. If not provided, uses settings.
            interceptors: Response interceptors, normally the auth redirect.
            transport: Optional httpx transport.
        """
        settings = get_settings()
        super().__init__(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            interceptors=interceptors,
            transport=transport,
        )

    @property
    def default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": f"nusong-client/{__version__}",
        }

    @property
    def session_cookies(self) -> httpx.Cookies:
        """Cookies currently held for the backend."""
        if self._client is None:
            return httpx.Cookies()
        return self._client.cookies
