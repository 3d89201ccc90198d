"""
Pipeline orchestrator that turns inputs into feed records.

Runs the stages in order: collect App IDs from every input (expanding
profiles), build one candidate per distinct App ID, optionally verify
the candidates, and return the final records. Bad inputs are reported
as diagnostics and never stop the run.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from steam_feeds.config import get_settings
from steam_feeds.feeds.client import SteamCommunityClient
from steam_feeds.feeds.contracts import (
    AppIdInput,
    CandidateFeed,
    InputSpec,
    NotAttempted,
    ProfileReference,
    ResultRecord,
    StoreUrlInput,
    UserProfileInput,
)
from steam_feeds.feeds.errors import FeedResolutionError
from steam_feeds.feeds.normalizer import normalize
from steam_feeds.feeds.profile import ProfileExpander
from steam_feeds.feeds.urls import build_candidate
from steam_feeds.feeds.verifier import FeedVerifier
from steam_feeds.logger import get_logger
from steam_feeds.utils.rate_limiter import RequestSpacer, RequestSpacerConfig


class PipelineStage(str, Enum):
    """Stages of a pipeline run, in execution order."""

    COLLECTING_IDENTIFIERS = "collecting_identifiers"
    BUILDING_CANDIDATES = "building_candidates"
    VERIFYING = "verifying"
    DONE = "done"


@dataclass
class PipelineProgress:
    """Tracks progress of a pipeline run."""

    stage: PipelineStage
    total: int
    completed: int = 0


@dataclass(frozen=True)
class Diagnostic:
    """A soft failure tied to the input that caused it."""

    raw_input: str
    error: str
    message: str

    def __str__(self) -> str:
        return f"{self.raw_input}: {self.message}"


@dataclass(frozen=True)
class _Collected:
    game_id: int
    display_name: str | None = None
    friendly_name: str | None = None


@dataclass
class PipelineResult:
    """Result of a complete pipeline run."""

    run_id: UUID
    started_at: datetime
    completed_at: datetime
    records: list[ResultRecord]
    diagnostics: list[Diagnostic]
    total_inputs: int
    succeeded_inputs: int
    verified: bool = False

    @property
    def exit_code(self) -> int:
        """0 when at least one input resolved, 1 otherwise."""
        return 0 if self.succeeded_inputs > 0 else 1

    @property
    def duration_seconds(self) -> float:
        return (self.completed_at - self.started_at).total_seconds()


ProgressCallback = Callable[[PipelineProgress], None]


class FeedPipeline:
    """
    Orchestrates normalization, profile expansion, candidate building
    and verification for one set of inputs.

    Example:
        >>> pipeline = FeedPipeline(delay_ms=250)
        >>> result = await pipeline.run([AppIdInput(value=440)], verify=True)
        >>> [record.url for record in result.records]
        ['https://steamcommunity.com/games/440/rss/']
    """

    def __init__(
        self,
        *,
        client: SteamCommunityClient | None = None,
        delay_ms: int | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._delay_ms = get_settings().steam.request_delay_ms if delay_ms is None else delay_ms
        self._sleep = sleep
        self._logger = get_logger(__name__, component="pipeline")

    async def run(
        self,
        specs: Sequence[InputSpec],
        *,
        verify: bool = False,
        on_progress: ProgressCallback | None = None,
    ) -> PipelineResult:
        """
        Run the pipeline over the given inputs.

        Args:
            specs: Inputs in command-line order
            verify: Download every candidate and check its content type
            on_progress: Called with a progress snapshot after each step

        Returns:
            PipelineResult: Ordered records plus diagnostics
        """
        run_id = uuid4()
        started_at = datetime.now(timezone.utc)
        self._logger.info("Starting run", run_id=str(run_id), inputs=len(specs), verify=verify)

        if self._client is not None:
            records, diagnostics, succeeded = await self._run(
                self._client, specs, verify, on_progress
            )
        else:
            async with SteamCommunityClient() as client:
                records, diagnostics, succeeded = await self._run(
                    client, specs, verify, on_progress
                )

        result = PipelineResult(
            run_id=run_id,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            records=records,
            diagnostics=diagnostics,
            total_inputs=len(specs),
            succeeded_inputs=succeeded,
            verified=verify,
        )

        self._logger.info(
            "Run complete",
            run_id=str(run_id),
            duration_seconds=round(result.duration_seconds, 3),
            records=len(records),
            diagnostics=len(diagnostics),
            succeeded_inputs=succeeded,
        )
        return result

    async def _run(
        self,
        client: SteamCommunityClient,
        specs: Sequence[InputSpec],
        verify: bool,
        on_progress: ProgressCallback | None,
    ) -> tuple[list[ResultRecord], list[Diagnostic], int]:
        # One spacer for every request of the run, profile fetches and feeds alike
        spacer = RequestSpacer(RequestSpacerConfig(delay_ms=self._delay_ms), sleep=self._sleep)

        collected, diagnostics, succeeded = await self._collect_identifiers(
            client, spacer, specs, on_progress
        )
        candidates = self._build_candidates(collected, on_progress)

        if verify:
            records = await self._verify(client, spacer, candidates, on_progress)
        else:
            records = [ResultRecord(candidate=c, outcome=NotAttempted()) for c in candidates]

        if on_progress:
            on_progress(PipelineProgress(PipelineStage.DONE, len(records), len(records)))
        return records, diagnostics, succeeded

    async def _collect_identifiers(
        self,
        client: SteamCommunityClient,
        spacer: RequestSpacer,
        specs: Sequence[InputSpec],
        on_progress: ProgressCallback | None,
    ) -> tuple[list[_Collected], list[Diagnostic], int]:
        collected: list[_Collected] = []
        diagnostics: list[Diagnostic] = []
        succeeded = 0

        expander = ProfileExpander(client, spacer=spacer)
        progress = PipelineProgress(PipelineStage.COLLECTING_IDENTIFIERS, total=len(specs))

        for spec in specs:
            try:
                collected.extend(await self._resolve(expander, spec))
                succeeded += 1
            except FeedResolutionError as e:
                diagnostic = Diagnostic(raw_input=spec.raw, error=e.kind, message=str(e))
                diagnostics.append(diagnostic)
                self._logger.info(
                    "Skipping input",
                    input=spec.raw,
                    error=e.kind,
                    message=str(e),
                    endpoint=e.endpoint,
                    status_code=e.status_code,
                )

            progress.completed += 1
            if on_progress:
                on_progress(progress)

        return collected, diagnostics, succeeded

    async def _resolve(self, expander: ProfileExpander, spec: InputSpec) -> list[_Collected]:
        resolved = normalize(spec)

        match spec, resolved:
            case (AppIdInput() | StoreUrlInput()), int(game_id):
                return [_Collected(game_id, display_name=f"Steam AppID {game_id}")]
            case UserProfileInput(), ProfileReference() as profile:
                # A profile failing midway contributes nothing
                return [
                    _Collected(game.app_id, display_name=game.name, friendly_name=game.friendly_url)
                    async for game in expander.expand_games(profile)
                ]
            case _:
                raise TypeError(f"Unexpected normalization of {spec!r}: {resolved!r}")

    def _build_candidates(
        self,
        collected: list[_Collected],
        on_progress: ProgressCallback | None,
    ) -> list[CandidateFeed]:
        seen: set[int] = set()
        candidates: list[CandidateFeed] = []

        for item in collected:
            if item.game_id in seen:
                continue
            seen.add(item.game_id)
            candidates.append(
                build_candidate(
                    item.game_id,
                    display_name=item.display_name,
                    friendly_name=item.friendly_name,
                )
            )

        self._logger.info(
            "Candidates built",
            identifiers=len(collected),
            candidates=len(candidates),
            duplicates=len(collected) - len(candidates),
        )
        if on_progress:
            on_progress(
                PipelineProgress(PipelineStage.BUILDING_CANDIDATES, len(candidates), len(candidates))
            )
        return candidates

    async def _verify(
        self,
        client: SteamCommunityClient,
        spacer: RequestSpacer,
        candidates: list[CandidateFeed],
        on_progress: ProgressCallback | None,
    ) -> list[ResultRecord]:
        verifier = FeedVerifier(client, delay_ms=self._delay_ms, sleep=self._sleep)
        progress = PipelineProgress(PipelineStage.VERIFYING, total=len(candidates))
        records: list[ResultRecord] = []

        async for outcome in verifier.verify_iter(candidates, spacer=spacer):
            candidate = candidates[progress.completed]
            records.append(ResultRecord(candidate=candidate, outcome=outcome))

            progress.completed += 1
            if on_progress:
                on_progress(progress)

        return records
