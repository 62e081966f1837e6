from .news_service import (
    FeedDecodeError,
    FeedFetchError,
    NewsServiceClient,
    NewsServiceError,
    NewsSource,
    RefreshCommandError,
    decode_news_payload,
)

__all__ = [
    "FeedDecodeError",
    "FeedFetchError",
    "NewsServiceClient",
    "NewsServiceError",
    "NewsSource",
    "RefreshCommandError",
    "decode_news_payload",
]
