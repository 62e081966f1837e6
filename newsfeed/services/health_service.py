"""Health monitoring service."""

from datetime import datetime
from enum import Enum


class HealthStatus(str, Enum):
    """Health status enumeration."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class HealthChecker:
    """Tracks how the remote news service has been responding."""

    def __init__(self, unhealthy_threshold: int) -> None:
        """Initialize health checker.

        Args:
            unhealthy_threshold: Consecutive failures before reporting unhealthy
        """
        self.unhealthy_threshold = unhealthy_threshold
        self.start_time = datetime.now()
        self.remote_reachable = False
        self.consecutive_failures = 0
        self.last_success: datetime | None = None

    def record_success(self) -> None:
        """Register a successful remote call."""
        self.consecutive_failures = 0
        self.remote_reachable = True
        self.last_success = datetime.now()

    def record_failure(self) -> None:
        """Register a failed remote call."""
        self.consecutive_failures += 1
        self.remote_reachable = False

    def get_status(self) -> HealthStatus:
        """Get current health status.

        Returns:
            HealthStatus enum value
        """
        if self.consecutive_failures >= self.unhealthy_threshold:
            return HealthStatus.UNHEALTHY
        if not self.remote_reachable:
            return HealthStatus.DEGRADED
        return HealthStatus.HEALTHY

    def get_uptime(self) -> float:
        """Get application uptime in seconds.

        Returns:
            Uptime in seconds
        """
        return (datetime.now() - self.start_time).total_seconds()
