"""Shared fixtures."""

import pytest

from newsfeed.config import Config, DisplayConfig, SyncConfig


@pytest.fixture
def settings() -> Config:
    return Config(
        sync=SyncConfig(poll_interval_minutes=20, refresh_delay_seconds=0.05),
        display=DisplayConfig(timezone="Asia/Kolkata", notification_history=10),
    )
