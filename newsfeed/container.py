"""FastAPI dependency helpers."""

from newsfeed.feed import NewsFeed
from newsfeed.feed import get_feed as _get_feed


def get_feed() -> NewsFeed:
    """Get the news feed for FastAPI dependency injection.

    Returns:
        NewsFeed singleton
    """
    return _get_feed()
