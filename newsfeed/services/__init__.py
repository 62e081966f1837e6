"""Feed services."""

from newsfeed.services.health_service import HealthChecker, HealthStatus
from newsfeed.services.notification_service import Notification, NotificationService
from newsfeed.services.scheduler_service import PollScheduler
from newsfeed.services.sync_service import (
    RefreshCoordinator,
    SyncController,
    SyncPhase,
    SyncState,
)

__all__ = [
    "HealthChecker",
    "HealthStatus",
    "Notification",
    "NotificationService",
    "PollScheduler",
    "RefreshCoordinator",
    "SyncController",
    "SyncPhase",
    "SyncState",
]
