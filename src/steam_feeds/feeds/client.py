"""
HTTP client shared by the profile expander and the verifier.

Wraps httpx.AsyncClient with the configured timeout and User-Agent,
and turns transport failures into NetworkError. Requests are never
retried.
"""

from typing import Any

import httpx

from steam_feeds.config import get_settings
from steam_feeds.feeds.errors import NetworkError
from steam_feeds.logger import get_logger


class SteamCommunityClient:
    """
    Thin async HTTP client for steamcommunity.com.

    Example:
        >>> async with SteamCommunityClient() as client:
        ...     response = await client.get("https://steamcommunity.com/games/440/rss/")
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header value
        """
        settings = get_settings()
        self._timeout = timeout or settings.steam.timeout_seconds
        self._user_agent = user_agent or settings.steam.user_agent
        self._logger = get_logger(self.__class__.__name__, component="http")
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers={"User-Agent": self._user_agent},
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SteamCommunityClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """
        Issue a single GET request.

        The response is returned whatever its status code; callers
        decide what a non-2xx status means for them.

        Raises:
            NetworkError: On connection failures and timeouts
        """
        self._logger.debug("Making request", method="GET", url=url)
        try:
            response = await self.client.get(url, **kwargs)
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request timed out after {self._timeout}s",
                endpoint=url,
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Request failed: {e.__class__.__name__}: {e}",
                endpoint=url,
            ) from e

        self._logger.debug(
            "Received response",
            url=url,
            status_code=response.status_code,
            content_type=response.headers.get("content-type"),
        )
        return response
