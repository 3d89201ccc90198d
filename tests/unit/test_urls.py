"""Tests for feed URL building."""

import os
import re
from unittest.mock import patch

import pytest

from steam_feeds.feeds.contracts import ProfileReference
from steam_feeds.feeds.urls import build_candidate, feed_url, games_list_url


class TestFeedUrl:
    def test_template(self) -> None:
        assert feed_url(440) == "https://steamcommunity.com/games/440/rss/"

    def test_friendly_name(self) -> None:
        assert feed_url("Portal") == "https://steamcommunity.com/games/Portal/rss/"

    @pytest.mark.parametrize("app_id", [1, 10, 440, 570, 1091500, 2147483647])
    def test_contains_only_that_number(self, app_id: int) -> None:
        url = feed_url(app_id)
        digit_runs = re.findall(r"\d+", url)

        assert digit_runs == [str(app_id)]

    def test_community_url_from_settings(self) -> None:
        with patch.dict(os.environ, {"STEAM_COMMUNITY_URL": "http://localhost:8080/"}):
            assert feed_url(440) == "http://localhost:8080/games/440/rss/"


class TestGamesListUrl:
    def test_vanity_profile(self) -> None:
        profile = ProfileReference(kind="id", value="examplehandle")

        assert games_list_url(profile) == (
            "https://steamcommunity.com/id/examplehandle/games/?tab=all"
        )

    def test_numeric_profile(self) -> None:
        profile = ProfileReference(kind="profiles", value="76561197960287930")

        assert games_list_url(profile) == (
            "https://steamcommunity.com/profiles/76561197960287930/games/?tab=all"
        )


class TestBuildCandidate:
    def test_plain_candidate(self) -> None:
        candidate = build_candidate(440)

        assert candidate.game_id == 440
        assert candidate.url == "https://steamcommunity.com/games/440/rss/"
        assert candidate.display_name is None
        assert candidate.alternate_url is None

    def test_friendly_name_becomes_alternate(self) -> None:
        candidate = build_candidate(400, display_name="Portal", friendly_name="Portal")

        assert candidate.url == "https://steamcommunity.com/games/400/rss/"
        assert candidate.alternate_url == "https://steamcommunity.com/games/Portal/rss/"
        assert candidate.display_name == "Portal"

    def test_friendly_name_equal_to_app_id_ignored(self) -> None:
        assert build_candidate(570, friendly_name="570").alternate_url is None

    def test_idempotent(self) -> None:
        assert build_candidate(440) == build_candidate(440)
