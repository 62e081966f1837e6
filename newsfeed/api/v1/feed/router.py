"""Feed view endpoints."""

import asyncio

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from newsfeed.container import get_feed
from newsfeed.feed import NewsFeed
from newsfeed.presentation.view import FeedView
from newsfeed.services.notification_service import Notification

router = APIRouter(prefix="/feed", tags=["feed"])


class RefreshResponse(BaseModel):
    """Response model for refresh trigger."""

    message: str
    refreshing: bool


@router.get("", response_model=FeedView)
async def get_feed_view(feed: NewsFeed = Depends(get_feed)) -> FeedView:
    """Current feed as displayed."""
    return feed.view()


@router.post("/refresh", response_model=RefreshResponse, status_code=status.HTTP_202_ACCEPTED)
async def trigger_refresh(feed: NewsFeed = Depends(get_feed)) -> RefreshResponse:
    """Start a manual refresh.

    The regeneration command runs in the background under the feed, which
    cancels it on shutdown. Its outcome arrives as a notification.
    """
    feed.start_refresh()
    # let the command start so the refreshing flag is visible in the response
    await asyncio.sleep(0)

    return RefreshResponse(message="Refresh requested", refreshing=feed.state.is_refreshing)


@router.get("/notifications", response_model=list[Notification])
async def get_notifications(
    limit: int | None = Query(default=None, ge=1),
    feed: NewsFeed = Depends(get_feed),
) -> list[Notification]:
    """Recent notifications, newest last."""
    return feed.notification_service.recent(limit)
