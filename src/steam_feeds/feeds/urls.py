"""URL templates for Steam Community feeds and profile game lists."""

from steam_feeds.config import get_settings
from steam_feeds.feeds.contracts import CandidateFeed, GameIdentifier, ProfileReference


def feed_url(identifier: int | str) -> str:
    """
    Build the news feed URL for a game.

    Steam accepts either the numeric App ID or, for some games,
    their friendly name (e.g. 'Portal') in this position.
    """
    return f"{get_settings().steam.community_url}/games/{identifier}/rss/"


def games_list_url(profile: ProfileReference) -> str:
    """Build the URL of a profile's full games list."""
    return f"{get_settings().steam.community_url}/{profile.path}/games/?tab=all"


def build_candidate(
    game_id: GameIdentifier,
    *,
    display_name: str | None = None,
    friendly_name: str | None = None,
) -> CandidateFeed:
    """
    Build the candidate feed for an App ID.

    Args:
        game_id: Validated Steam App ID
        display_name: Human readable label from an upstream source, if any
        friendly_name: Friendly URL name from a profile listing, if any

    Returns:
        CandidateFeed: Candidate whose url is the App ID feed URL
    """
    alternate = None
    if friendly_name and friendly_name != str(game_id):
        alternate = feed_url(friendly_name)
    return CandidateFeed(
        game_id=game_id,
        url=feed_url(game_id),
        display_name=display_name,
        alternate_url=alternate,
    )
