"""
Steam Feeds.

Resolves Steam games and user profiles into news feed URLs,
optionally verifies them, and renders them as a list or OPML.
"""

from steam_feeds.config import Settings, get_settings
from steam_feeds.logger import get_logger, setup_logging

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
