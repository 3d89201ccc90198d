"""Integration tests for profile expansion with mocked HTTP responses."""

from pathlib import Path

import httpx
import pytest
import respx

from steam_feeds.feeds.client import SteamCommunityClient
from steam_feeds.feeds.contracts import ProfileReference
from steam_feeds.feeds.errors import NetworkError, ProfileNotFound, ProfilePrivate
from steam_feeds.feeds.profile import ProfileExpander, extract_games_list
from steam_feeds.utils.rate_limiter import RequestSpacer, RequestSpacerConfig

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
GAMES_URL = "https://steamcommunity.com/id/examplehandle/games/?tab=all"
PROFILE = ProfileReference(kind="id", value="examplehandle")


def load_fixture(name: str) -> str:
    with (FIXTURES_DIR / name).open(encoding="utf-8") as f:
        return f.read()


async def collect(expander: ProfileExpander, profile: ProfileReference = PROFILE) -> list[int]:
    return [app_id async for app_id in expander.expand(profile)]


class TestExtractGamesList:
    def test_script_variable(self) -> None:
        games = extract_games_list(load_fixture("games_public_rggames.html"))

        assert games is not None
        assert len(games) == 5

    def test_data_attribute(self) -> None:
        games = extract_games_list(load_fixture("games_public_attribute.html"))

        assert games == [
            {"appid": 730, "name": "Counter-Strike 2", "playtime_forever": 4210},
            {"appid": 620, "name": "Portal 2", "playtime_forever": 812},
        ]

    def test_private_page(self) -> None:
        assert extract_games_list(load_fixture("games_private.html")) is None

    def test_invalid_json(self) -> None:
        with pytest.raises(ValueError):
            extract_games_list("var rgGames = [{broken];\n var x = 1;")

    @pytest.mark.parametrize(
        "markup",
        [
            '<template data-profile-gameslist = "{&quot;rgGames&quot;:[{&quot;appid&quot;:440}]}">',
            "<div data-profile-gameslist='{\"rgGames\":[{\"appid\":440}]}'></div>",
            '<div class="x"\n     data-profile-gameslist="{&#34;rgGames&#34;:[{&#34;appid&#34;:440}]}"></div>',
        ],
    )
    def test_data_attribute_quoting_variants(self, markup: str) -> None:
        assert extract_games_list(f"<html><body>{markup}</body></html>") == [{"appid": 440}]

    def test_data_attribute_without_games(self) -> None:
        page = '<div data-profile-gameslist="{&quot;strProfileName&quot;:&quot;x&quot;}"></div>'

        assert extract_games_list(page) is None


class TestProfileExpander:
    """Integration tests for ProfileExpander."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_expand_skips_malformed_entries(self) -> None:
        """Test that entries without a usable appid are skipped silently."""
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, html=load_fixture("games_public_rggames.html"))
        )

        async with SteamCommunityClient() as client:
            app_ids = await collect(ProfileExpander(client))

        assert app_ids == [440, 400, 570]

    @respx.mock
    @pytest.mark.asyncio
    async def test_expand_games_keeps_names(self) -> None:
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, html=load_fixture("games_public_rggames.html"))
        )

        async with SteamCommunityClient() as client:
            games = [g async for g in ProfileExpander(client).expand_games(PROFILE)]

        assert [(g.app_id, g.name, g.friendly_url) for g in games] == [
            (440, "Team Fortress 2", "tf2"),
            (400, "Portal", "Portal"),
            (570, "Dota 2", None),
        ]

    @respx.mock
    @pytest.mark.asyncio
    async def test_expand_data_attribute_layout(self) -> None:
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, html=load_fixture("games_public_attribute.html"))
        )

        async with SteamCommunityClient() as client:
            app_ids = await collect(ProfileExpander(client))

        assert app_ids == [730, 620]

    @respx.mock
    @pytest.mark.asyncio
    async def test_single_quoted_data_attribute_is_public(self) -> None:
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(
                200,
                html="<html><body><div data-profile-gameslist='{\"rgGames\":[{\"appid\":440}]}'>"
                "</div></body></html>",
            )
        )

        async with SteamCommunityClient() as client:
            app_ids = await collect(ProfileExpander(client))

        assert app_ids == [440]

    @respx.mock
    @pytest.mark.asyncio
    async def test_numeric_profile_url(self) -> None:
        route = respx.get(
            "https://steamcommunity.com/profiles/76561197960287930/games/?tab=all"
        ).mock(return_value=httpx.Response(200, html=load_fixture("games_public_attribute.html")))
        profile = ProfileReference(kind="profiles", value="76561197960287930")

        async with SteamCommunityClient() as client:
            app_ids = await collect(ProfileExpander(client), profile)

        assert route.called
        assert app_ids == [730, 620]

    @respx.mock
    @pytest.mark.asyncio
    async def test_private_profile(self) -> None:
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, html=load_fixture("games_private.html"))
        )

        async with SteamCommunityClient() as client:
            with pytest.raises(ProfilePrivate) as exc_info:
                await collect(ProfileExpander(client))

        assert exc_info.value.raw_input == "id/examplehandle"

    @respx.mock
    @pytest.mark.asyncio
    async def test_profile_not_found_page(self) -> None:
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, html=load_fixture("profile_not_found.html"))
        )

        async with SteamCommunityClient() as client:
            with pytest.raises(ProfileNotFound):
                await collect(ProfileExpander(client))

    @respx.mock
    @pytest.mark.asyncio
    async def test_profile_not_found_status(self) -> None:
        respx.get(GAMES_URL).mock(return_value=httpx.Response(404))

        async with SteamCommunityClient() as client:
            with pytest.raises(ProfileNotFound):
                await collect(ProfileExpander(client))

    @respx.mock
    @pytest.mark.asyncio
    async def test_server_error(self) -> None:
        respx.get(GAMES_URL).mock(return_value=httpx.Response(503))

        async with SteamCommunityClient() as client:
            with pytest.raises(NetworkError) as exc_info:
                await collect(ProfileExpander(client))

        assert exc_info.value.status_code == 503
        assert exc_info.value.endpoint == GAMES_URL

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        respx.get(GAMES_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        async with SteamCommunityClient() as client:
            with pytest.raises(NetworkError):
                await collect(ProfileExpander(client))

    @respx.mock
    @pytest.mark.asyncio
    async def test_lazy_and_reissued(self) -> None:
        """Test that no request is made until iteration, and each expansion refetches."""
        route = respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, html=load_fixture("games_public_attribute.html"))
        )

        async with SteamCommunityClient() as client:
            expander = ProfileExpander(client)
            iterator = expander.expand(PROFILE)
            assert route.call_count == 0

            first = [app_id async for app_id in iterator]
            second = await collect(expander)

        assert first == second == [730, 620]
        assert route.call_count == 2

    @respx.mock
    @pytest.mark.asyncio
    async def test_consecutive_profiles_are_spaced(self, sleep_recorder) -> None:
        respx.get(GAMES_URL).mock(
            return_value=httpx.Response(200, html=load_fixture("games_public_attribute.html"))
        )
        spacer = RequestSpacer(RequestSpacerConfig(delay_ms=250), sleep=sleep_recorder)

        async with SteamCommunityClient() as client:
            expander = ProfileExpander(client, spacer=spacer)
            await collect(expander)
            await collect(expander)

        assert sleep_recorder.calls == [0.25]
