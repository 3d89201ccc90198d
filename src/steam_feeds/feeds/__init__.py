"""
Feed resolution pipeline.

Normalizes game and profile inputs, expands profiles into their
games, builds Steam Community news feed URLs and optionally
verifies that they serve a feed.
"""

from steam_feeds.feeds.client import SteamCommunityClient
from steam_feeds.feeds.contracts import (
    AppIdInput,
    CandidateFeed,
    Failed,
    GameIdentifier,
    InputSpec,
    NotAttempted,
    ProfileGame,
    ProfileReference,
    ResultRecord,
    StoreUrlInput,
    UserProfileInput,
    VerificationOutcome,
    Verified,
)
from steam_feeds.feeds.errors import (
    FeedResolutionError,
    InvalidIdentifier,
    NetworkError,
    ProfileNotFound,
    ProfilePrivate,
    UnparseableUrl,
    VerificationFailed,
)
from steam_feeds.feeds.normalizer import normalize
from steam_feeds.feeds.pipeline import (
    Diagnostic,
    FeedPipeline,
    PipelineProgress,
    PipelineResult,
    PipelineStage,
)
from steam_feeds.feeds.profile import ProfileExpander
from steam_feeds.feeds.urls import build_candidate, feed_url, games_list_url
from steam_feeds.feeds.verifier import FeedVerifier

__all__ = [
    # Contracts
    "AppIdInput",
    "CandidateFeed",
    "Failed",
    "GameIdentifier",
    "InputSpec",
    "NotAttempted",
    "ProfileGame",
    "ProfileReference",
    "ResultRecord",
    "StoreUrlInput",
    "UserProfileInput",
    "VerificationOutcome",
    "Verified",
    # Errors
    "FeedResolutionError",
    "InvalidIdentifier",
    "NetworkError",
    "ProfileNotFound",
    "ProfilePrivate",
    "UnparseableUrl",
    "VerificationFailed",
    # Components
    "Diagnostic",
    "FeedPipeline",
    "FeedVerifier",
    "PipelineProgress",
    "PipelineResult",
    "PipelineStage",
    "ProfileExpander",
    "SteamCommunityClient",
    "build_candidate",
    "feed_url",
    "games_list_url",
    "normalize",
]
