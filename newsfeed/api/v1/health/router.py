"""Health check endpoint for monitoring."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from newsfeed import __version__
from newsfeed.container import get_feed
from newsfeed.feed import NewsFeed
from newsfeed.services.health_service import HealthStatus

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: HealthStatus
    timestamp: datetime
    remote_reachable: bool
    consecutive_failures: int
    last_update: datetime | None
    uptime_seconds: float
    version: str


@router.get("", response_model=HealthResponse)
async def health_check(feed: NewsFeed = Depends(get_feed)) -> HealthResponse:
    """Health check endpoint.

    Returns:
        HealthResponse with current status
    """
    return HealthResponse(
        status=feed.health.get_status(),
        timestamp=datetime.now(),
        remote_reachable=feed.health.remote_reachable,
        consecutive_failures=feed.health.consecutive_failures,
        last_update=feed.state.last_update,
        uptime_seconds=feed.health.get_uptime(),
        version=__version__,
    )


@router.get("/ready")
async def readiness_check(feed: NewsFeed = Depends(get_feed)) -> dict[str, bool | HealthStatus]:
    """Readiness check endpoint.

    Returns:
        Dictionary indicating readiness status

    Raises:
        HTTPException: If the news service keeps failing
    """
    health_status = feed.health.get_status()

    if health_status == HealthStatus.UNHEALTHY:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=(
                f"News service unhealthy: {feed.health.consecutive_failures} consecutive failures"
            ),
        )

    return {"ready": True, "status": health_status}


@router.get("/live")
async def liveness_check(feed: NewsFeed = Depends(get_feed)) -> dict[str, bool | float]:
    """Liveness check endpoint.

    Returns:
        Dictionary indicating liveness status
    """
    return {"alive": True, "uptime_seconds": feed.health.get_uptime()}
