"""Client for the remote news retrieval service."""

import json
from typing import Protocol

import aiohttp
from aiohttp import ClientTimeout
from loguru import logger
from pydantic import ValidationError

from newsfeed.models.announcement import AnnouncementItem, snapshot_adapter


class NewsServiceError(Exception):
    """Base error for news service calls."""


class FeedFetchError(NewsServiceError):
    """Listing request did not complete successfully."""


class FeedDecodeError(NewsServiceError):
    """Listing payload is not a list of announcement items."""


class RefreshCommandError(NewsServiceError):
    """Regeneration command did not complete successfully."""


class NewsSource(Protocol):
    """Anything the synchronization core can read the feed from."""

    async def list_news(self) -> list[AnnouncementItem]:
        """Return the full current list of announcements."""
        ...

    async def request_refresh(self) -> None:
        """Ask the remote side to regenerate its data."""
        ...


def decode_news_payload(body: str) -> list[AnnouncementItem]:
    """Decode a listing response body.

    Args:
        body: Raw response text

    Returns:
        Announcement items in server order

    Raises:
        FeedDecodeError: If the body is not a JSON list of items
    """
    if not body.strip():
        return []

    try:
        payload = json.loads(body)
    except ValueError as e:
        raise FeedDecodeError(f"Invalid JSON in news payload: {e}") from e

    if payload is None:
        return []

    try:
        return snapshot_adapter.validate_python(payload)
    except ValidationError as e:
        raise FeedDecodeError(f"Unexpected news payload: {e.error_count()} errors") from e


class NewsServiceClient:
    """aiohttp client for the news service endpoints."""

    def __init__(self, base_url: str, timeout: float) -> None:
        """Initialize client.

        Args:
            base_url: Service root, without the /api suffix
            timeout: Total request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def news_url(self) -> str:
        """Listing endpoint."""
        return f"{self.base_url}/api/news"

    @property
    def refresh_url(self) -> str:
        """Regeneration command endpoint."""
        return f"{self.base_url}/api/news/refresh"

    async def list_news(self) -> list[AnnouncementItem]:
        """Fetch the current announcement list.

        Returns:
            Announcement items in server order

        Raises:
            FeedFetchError: On transport failure or non-success status
            FeedDecodeError: If the payload is malformed
        """
        logger.debug(f"Fetching news from {self.news_url}")

        try:
            async with (
                aiohttp.ClientSession() as session,
                session.get(self.news_url, timeout=ClientTimeout(total=self.timeout)) as response,
            ):
                response.raise_for_status()
                body = await response.text()
        except (aiohttp.ClientError, TimeoutError) as e:
            raise FeedFetchError(f"GET {self.news_url} failed: {e!r}") from e

        items = decode_news_payload(body)
        logger.debug(f"Received {len(items)} announcements")
        return items

    async def request_refresh(self) -> None:
        """Send the regeneration command. The response body is ignored.

        Raises:
            RefreshCommandError: On transport failure or non-success status
        """
        logger.debug(f"Requesting regeneration at {self.refresh_url}")

        try:
            async with (
                aiohttp.ClientSession() as session,
                session.post(
                    self.refresh_url, timeout=ClientTimeout(total=self.timeout)
                ) as response,
            ):
                response.raise_for_status()
        except (aiohttp.ClientError, TimeoutError) as e:
            raise RefreshCommandError(f"POST {self.refresh_url} failed: {e!r}") from e
