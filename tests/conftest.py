"""Shared fixtures."""

from collections.abc import Iterator

import pytest

from steam_feeds.config import get_settings


class SleepRecorder:
    """Stand-in for asyncio.sleep that records the requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Reload settings for every test so patched environments apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()
