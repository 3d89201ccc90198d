"""
Request spacing for Steam Community requests.

Steam Community has no published rate limit, so requests are
spaced by a fixed delay instead of a token bucket: every request
after the first one in a run waits the configured delay.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from steam_feeds.logger import get_logger


@dataclass
class RequestSpacerConfig:
    """Configuration for request spacer."""

    delay_ms: int = 250

    def __post_init__(self) -> None:
        if self.delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {self.delay_ms}")

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0


@dataclass
class RequestSpacer:
    """
    Fixed-delay spacer for sequential requests.

    The first acquire() returns immediately; each later one sleeps
    for the configured delay first. One spacer covers one run.

    Example:
        >>> spacer = RequestSpacer(RequestSpacerConfig(delay_ms=250))
        >>> async with spacer:
        ...     await make_request()
    """

    config: RequestSpacerConfig = field(default_factory=RequestSpacerConfig)
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    _is_first_call: bool = field(init=False, default=True)
    _calls: int = field(init=False, default=0)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        """Initialize spacer state."""
        self._logger = get_logger(__name__, component="rate_limiter")

    async def acquire(self) -> None:
        """Wait until the next request may be issued."""
        if self._is_first_call:
            self._is_first_call = False
        elif self.config.delay_ms > 0:
            self._logger.debug(
                "Waiting before next request",
                wait_seconds=self.config.delay_seconds,
            )
            await self.sleep(self.config.delay_seconds)
        self._calls += 1

    async def __aenter__(self) -> "RequestSpacer":
        """Acquire a slot on context entry."""
        await self.acquire()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """No-op on context exit."""
        pass

    @property
    def calls(self) -> int:
        """Number of requests let through so far."""
        return self._calls
