"""
Utility modules.

Provides request spacing shared by the profile expander
and the feed verifier.
"""

from steam_feeds.utils.rate_limiter import RequestSpacer, RequestSpacerConfig

__all__ = [
    "RequestSpacer",
    "RequestSpacerConfig",
]
