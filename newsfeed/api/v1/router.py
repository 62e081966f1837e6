"""API v1 router - aggregates all domain routers."""

from fastapi import APIRouter

from newsfeed.api.v1.feed import router as feed_router
from newsfeed.api.v1.health import router as health_router

router = APIRouter(prefix="/api/v1")

router.include_router(feed_router)
router.include_router(health_router)
