"""Configuration management using Pydantic Settings v2."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from ruamel.yaml import YAML


class NewsServiceConfig(BaseSettings):
    """Remote news service configuration."""

    base_url: str = Field(default="http://localhost:8001", description="News service root URL")
    timeout_seconds: float = Field(default=15.0, gt=0, description="Request timeout in seconds")


class SyncConfig(BaseSettings):
    """Feed synchronization configuration."""

    poll_interval_minutes: float = Field(
        default=20, gt=0, description="Interval between periodic reloads"
    )
    refresh_delay_seconds: float = Field(
        default=2.0, ge=0, description="Wait after a refresh command before reloading"
    )
    initial_load: bool = Field(default=True, description="Load the feed on startup")


class DisplayConfig(BaseSettings):
    """Presentation configuration."""

    timezone: str = Field(default="Asia/Kolkata", description="Timezone for displayed times")
    retention_hours: int = Field(default=48, ge=1, description="Retention advertised in footer")
    notification_history: int = Field(
        default=50, ge=1, description="Number of notifications kept in memory"
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    file: str = Field(default="logs/newsfeed.log", description="Log file path")
    rotation: str = Field(default="100 MB", description="Log rotation size")
    retention: str = Field(default="7 days", description="Log retention period")
    json_format: bool = Field(default=False, description="Use JSON log format")


class HealthCheckConfig(BaseSettings):
    """Health check configuration."""

    unhealthy_threshold: int = Field(
        default=3, ge=1, description="Consecutive remote failures before unhealthy"
    )


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    news_service: NewsServiceConfig = Field(default_factory=NewsServiceConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    health: HealthCheckConfig = Field(default_factory=HealthCheckConfig)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "Config":
        """Load configuration from YAML file with environment variable overrides.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Config instance with loaded settings

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If YAML parsing fails
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        yaml = YAML()
        with open(config_path) as f:
            config_dict = yaml.load(f) or {}

        config_dict = cls._normalize_keys(config_dict)

        return cls(
            news_service=NewsServiceConfig(**config_dict.pop("news_service", {})),
            sync=SyncConfig(**config_dict.pop("sync", {})),
            display=DisplayConfig(**config_dict.pop("display", {})),
            logging=LoggingConfig(**config_dict.pop("logging", {})),
            health=HealthCheckConfig(**config_dict.pop("health", {})),
        )

    @staticmethod
    def _normalize_keys(data: dict) -> dict:
        """Convert hyphenated keys to underscored for Python compatibility.

        Args:
            data: Dictionary with possibly hyphenated keys

        Returns:
            Dictionary with normalized keys
        """
        normalized = {}
        for key, value in data.items():
            new_key = key.replace("-", "_")
            if isinstance(value, dict):
                normalized[new_key] = Config._normalize_keys(value)
            else:
                normalized[new_key] = value
        return normalized


def load_config(config_path: str | Path = "config/settings.yaml") -> Config:
    """Load application configuration.

    Args:
        config_path: Path to configuration file

    Returns:
        Config instance

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        return Config.from_yaml(config_path)
    except FileNotFoundError:
        return Config()


config: Config = load_config()
