"""
Identifier normalization.

Turns raw command-line inputs into either a Steam App ID or a
canonical profile reference. Pure string/number parsing, no I/O.
"""

import re
from urllib.parse import urlsplit

from steam_feeds.config import get_settings
from steam_feeds.feeds.contracts import (
    AppIdInput,
    InputSpec,
    ProfileReference,
    StoreUrlInput,
    UserProfileInput,
)
from steam_feeds.feeds.errors import InvalidIdentifier, UnparseableUrl

STEAMID64_PATTERN = re.compile(r"^7656119\d{10}$")
HANDLE_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
COMMUNITY_HOSTS = frozenset({"steamcommunity.com", "www.steamcommunity.com"})


def normalize(spec: InputSpec) -> int | ProfileReference:
    """
    Normalize one input.

    Args:
        spec: Input as given on the command line

    Returns:
        The App ID for game inputs, or a ProfileReference that still
        needs to be expanded for profile inputs.

    Raises:
        InvalidIdentifier: If an App ID or handle is malformed
        UnparseableUrl: If a URL has no usable identifier in it
    """
    match spec:
        case AppIdInput(value=value):
            return normalize_app_id(value)
        case StoreUrlInput(value=value):
            return parse_store_url(value)
        case UserProfileInput(value=value):
            return parse_profile(value)


def normalize_app_id(value: int | str) -> int:
    if isinstance(value, str) and value.strip().isdecimal():
        value = int(value.strip())
    # bool is an int subclass; True must not become App ID 1
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidIdentifier(
            f"App ID must be a positive integer, got {value!r}",
            raw_input=str(value),
        )
    return value


def parse_store_url(url: str) -> int:
    """Extract the App ID from a store page URL such as /app/440/Team_Fortress_2/."""
    store_host = get_settings().steam.store_host.lower()
    parts = urlsplit(url.strip())

    if parts.scheme.lower() not in ("http", "https") or (parts.hostname or "") != store_host:
        raise UnparseableUrl(f"Not a {store_host} URL: {url}", raw_input=url)

    segments = [s for s in parts.path.split("/") if s]
    try:
        app_segment = segments[segments.index("app") + 1]
    except (ValueError, IndexError):
        raise UnparseableUrl(f"No /app/<id> segment in URL: {url}", raw_input=url) from None

    if not app_segment.isdigit() or int(app_segment) <= 0:
        raise UnparseableUrl(
            f"App segment {app_segment!r} is not a positive number in URL: {url}",
            raw_input=url,
        )
    return int(app_segment)


def parse_profile(value: str) -> ProfileReference:
    """
    Canonicalize a profile handle, SteamID64 or profile URL.

    Examples:
        >>> parse_profile("examplehandle").path
        'id/examplehandle'
        >>> parse_profile("https://steamcommunity.com/profiles/76561197960287930/").path
        'profiles/76561197960287930'
    """
    candidate = value.strip()

    if "://" not in candidate and "/" not in candidate:
        if STEAMID64_PATTERN.match(candidate):
            return ProfileReference(kind="profiles", value=candidate)
        if HANDLE_PATTERN.match(candidate):
            return ProfileReference(kind="id", value=candidate)
        raise InvalidIdentifier(f"Not a valid profile handle: {value!r}", raw_input=value)

    parts = urlsplit(candidate if "://" in candidate else f"https://{candidate}")
    if parts.scheme.lower() not in ("http", "https") or (parts.hostname or "") not in COMMUNITY_HOSTS:
        raise UnparseableUrl(f"Not a steamcommunity.com profile URL: {value}", raw_input=value)

    segments = [s for s in parts.path.split("/") if s]
    if len(segments) >= 2:
        kind, ident = segments[0].lower(), segments[1]
        if kind == "id" and HANDLE_PATTERN.match(ident):
            return ProfileReference(kind="id", value=ident)
        if kind == "profiles" and STEAMID64_PATTERN.match(ident):
            return ProfileReference(kind="profiles", value=ident)

    raise UnparseableUrl(f"No /id/<handle> or /profiles/<steamid> in URL: {value}", raw_input=value)
