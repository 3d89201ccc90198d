"""
Profile expansion.

Fetches a Steam Community profile's games page and yields one
game per entry of its games list. Steam embeds the list in the
page either as an inline `var rgGames = [...]` script variable
(older layout) or as a `data-profile-gameslist` JSON attribute.
"""

import json
import re
from collections.abc import AsyncIterator
from typing import Any

from bs4 import BeautifulSoup
from pydantic import ValidationError as PydanticValidationError

from steam_feeds.feeds.client import SteamCommunityClient
from steam_feeds.feeds.contracts import GameIdentifier, ProfileGame, ProfileReference
from steam_feeds.feeds.errors import NetworkError, ProfileNotFound, ProfilePrivate
from steam_feeds.feeds.urls import games_list_url
from steam_feeds.logger import get_logger
from steam_feeds.utils.rate_limiter import RequestSpacer

RG_GAMES_PATTERN = re.compile(r"var rgGames = (\[.*\]);\s+var")
GAMESLIST_ATTR = "data-profile-gameslist"
NOT_FOUND_MARKERS = (
    "The specified profile could not be found.",
    "The specified profile was not found.",
)

logger = get_logger(__name__, component="profile_expander")


def extract_games_list(body: str) -> list[Any] | None:
    """
    Pull the raw games list out of a games page.

    Returns:
        The decoded list, or None when the page does not expose it
        (the profile's game details are not public).

    Raises:
        ValueError: If the list is present but is not valid JSON
    """
    match = RG_GAMES_PATTERN.search(body)
    if match:
        games = json.loads(match.group(1))
        return games if isinstance(games, list) else None

    soup = BeautifulSoup(body, "html.parser")
    config = soup.select_one(f"[{GAMESLIST_ATTR}]")
    if config is None:
        return None

    payload = json.loads(config[GAMESLIST_ATTR])
    games = payload.get("rgGames") if isinstance(payload, dict) else None
    return games if isinstance(games, list) else None


class ProfileExpander:
    """
    Expands a profile reference into the games it lists publicly.

    Expansion is lazy: the request is made when iteration starts, and
    every new expansion makes a new request.

    Example:
        >>> async with SteamCommunityClient() as client:
        ...     expander = ProfileExpander(client)
        ...     async for app_id in expander.expand(profile):
        ...         print(app_id)
    """

    def __init__(
        self,
        client: SteamCommunityClient,
        *,
        spacer: RequestSpacer | None = None,
    ) -> None:
        self._client = client
        self._spacer = spacer or RequestSpacer()

    async def expand(self, profile: ProfileReference) -> AsyncIterator[GameIdentifier]:
        """Yield the App ID of every game on the profile."""
        async for game in self.expand_games(profile):
            yield game.app_id

    async def expand_games(self, profile: ProfileReference) -> AsyncIterator[ProfileGame]:
        """
        Yield every parseable game on the profile.

        Raises:
            ProfileNotFound: If Steam has no such profile
            ProfilePrivate: If the games list is not public
            NetworkError: If the page cannot be fetched
        """
        url = games_list_url(profile)
        raw = str(profile)

        await self._spacer.acquire()
        logger.info("Fetching games list", profile=raw, url=url)
        response = await self._client.get(url)

        if response.status_code == 404:
            raise ProfileNotFound(
                f"Profile not found: {raw}",
                raw_input=raw,
                endpoint=url,
                status_code=404,
            )
        if response.is_error:
            raise NetworkError(
                f"Games list request failed with HTTP {response.status_code}",
                raw_input=raw,
                endpoint=url,
                status_code=response.status_code,
            )

        body = response.text
        if any(marker in body for marker in NOT_FOUND_MARKERS):
            raise ProfileNotFound(f"Profile not found: {raw}", raw_input=raw, endpoint=url)

        try:
            entries = extract_games_list(body)
        except ValueError as e:
            raise NetworkError(
                f"Games list for {raw} could not be decoded",
                raw_input=raw,
                endpoint=url,
            ) from e

        if entries is None:
            raise ProfilePrivate(
                f"Games list for {raw} is not public. "
                'Make sure "Game details" in Privacy Settings is set to Public.',
                raw_input=raw,
                endpoint=url,
            )

        yielded = 0
        for entry in entries:
            try:
                game = ProfileGame.model_validate(entry)
            except PydanticValidationError:
                logger.debug("Skipping malformed games list entry", profile=raw, entry=entry)
                continue
            yielded += 1
            yield game

        logger.info("Games list expanded", profile=raw, listed=len(entries), games=yielded)
