"""
Feed verification.

Downloads each candidate feed URL in turn and checks that the
response declares an XML feed content type. Requests are strictly
sequential and spaced by a fixed delay.
"""

import asyncio
import xml.etree.ElementTree as ET
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from typing import Any

from steam_feeds.config import get_settings
from steam_feeds.feeds.client import SteamCommunityClient
from steam_feeds.feeds.contracts import CandidateFeed, Failed, VerificationOutcome, Verified
from steam_feeds.feeds.errors import NetworkError, VerificationFailed
from steam_feeds.logger import get_logger
from steam_feeds.utils.rate_limiter import RequestSpacer, RequestSpacerConfig

FEED_MEDIA_TYPES = frozenset(
    {
        "text/xml",
        "application/xml",
        "application/rss+xml",
        "application/atom+xml",
    }
)
ATOM_TITLE = "{http://www.w3.org/2005/Atom}title"


def media_type(content_type: str | None) -> str:
    """Return the bare, lower-cased media type of a Content-Type header."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_feed_content_type(content_type: str | None) -> bool:
    return media_type(content_type) in FEED_MEDIA_TYPES


def extract_feed_title(document: bytes) -> str | None:
    """Read the channel title of an RSS document (or the Atom feed title)."""
    try:
        root = ET.fromstring(document)
    except ET.ParseError:
        return None
    title = root.findtext("channel/title") or root.findtext(ATOM_TITLE)
    if title is None:
        return None
    return title.strip() or None


class FeedVerifier:
    """
    Sequential, rate-limited feed verifier.

    Produces exactly one outcome per candidate, in candidate order.
    A failing candidate never stops the run.

    Example:
        >>> async with SteamCommunityClient() as client:
        ...     verifier = FeedVerifier(client, delay_ms=250)
        ...     outcomes = await verifier.verify(candidates)
    """

    def __init__(
        self,
        client: SteamCommunityClient,
        *,
        delay_ms: int | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """
        Initialize the verifier.

        Args:
            client: HTTP client used for the downloads
            delay_ms: Delay between consecutive requests (settings default if None)
            sleep: Coroutine used to wait between requests
        """
        self._client = client
        self._config = RequestSpacerConfig(
            delay_ms=get_settings().steam.request_delay_ms if delay_ms is None else delay_ms
        )
        self._sleep = sleep
        self._logger = get_logger(__name__, component="verifier")

    async def verify(self, candidates: Sequence[CandidateFeed]) -> list[VerificationOutcome]:
        """Verify every candidate and return the outcomes in the same order."""
        return [outcome async for outcome in self.verify_iter(candidates)]

    async def verify_iter(
        self,
        candidates: Sequence[CandidateFeed],
        *,
        spacer: RequestSpacer | None = None,
    ) -> AsyncIterator[VerificationOutcome]:
        """
        Yield one outcome per candidate as soon as it is known.

        Args:
            candidates: Candidates in output order
            spacer: Spacer shared with earlier requests of the same run.
                A fresh one (no delay before the first request) if None.
        """
        if spacer is None:
            spacer = RequestSpacer(self._config, sleep=self._sleep)
        first_call = spacer.calls

        self._logger.info(
            "Starting verification",
            total=len(candidates),
            delay_ms=self._config.delay_ms,
        )

        verified = 0
        for candidate in candidates:
            outcome = await self._check(spacer, candidate.url)

            if isinstance(outcome, Failed) and candidate.alternate_url:
                self._logger.debug(
                    "Trying friendly feed URL",
                    game_id=candidate.game_id,
                    url=candidate.alternate_url,
                )
                alternate = await self._check(spacer, candidate.alternate_url)
                if isinstance(alternate, Verified):
                    outcome = alternate

            if isinstance(outcome, Verified):
                verified += 1
            else:
                self._logger.info(
                    "Feed not verified",
                    game_id=candidate.game_id,
                    url=candidate.url,
                    reason=outcome.reason,
                )
            yield outcome

        self._logger.info(
            "Verification complete",
            total=len(candidates),
            verified=verified,
            failed=len(candidates) - verified,
            requests=spacer.calls - first_call,
        )

    async def _check(self, spacer: RequestSpacer, url: str) -> Verified | Failed:
        try:
            return await self._fetch_feed(spacer, url)
        except VerificationFailed as e:
            return Failed(reason=str(e))

    async def _fetch_feed(self, spacer: RequestSpacer, url: str) -> Verified:
        """
        Download one URL and confirm it is a feed.

        Raises:
            VerificationFailed: If the request fails or the response is not a feed
        """
        await spacer.acquire()

        try:
            response = await self._client.get(url)
        except NetworkError as e:
            raise VerificationFailed(str(e), endpoint=url) from e

        if response.is_error:
            raise VerificationFailed(
                f"HTTP {response.status_code}",
                endpoint=url,
                status_code=response.status_code,
            )

        content_type = response.headers.get("content-type")
        if not is_feed_content_type(content_type):
            raise VerificationFailed(
                f"unexpected content type: {content_type or 'none'}",
                endpoint=url,
                status_code=response.status_code,
            )

        return Verified(url=url, title=extract_feed_title(response.content))
