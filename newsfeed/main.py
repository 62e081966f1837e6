"""Main application entry point with feed lifecycle and logging."""

import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from loguru import logger

from newsfeed import __version__
from newsfeed.api.v1.router import router as api_router
from newsfeed.config import LoggingConfig, config
from newsfeed.feed import get_feed, reset_feed


def setup_logging(logging_config: LoggingConfig, log_to_file: bool = True) -> None:
    """Configure loguru sinks.

    Args:
        logging_config: Logging section of the configuration
        log_to_file: Also write a rotating log file
    """
    log_level = logging_config.level
    logger.remove()

    if logging_config.json_format:
        logger.add(
            sys.stdout,
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
            serialize=True,
        )
    else:
        logger.add(
            sys.stdout,
            level=log_level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>",
        )

    if log_to_file:
        log_path = Path(logging_config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            level=log_level,
            rotation=logging_config.rotation,
            retention=logging_config.retention,
            compression="zip",
            serialize=logging_config.json_format,
        )

    logger.info(f"Logging configured at {log_level} level")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager.

    Args:
        app: FastAPI instance

    Yields:
        None
    """
    setup_logging(config.logging)
    await startup()

    yield

    await shutdown()


async def startup() -> None:
    """Mount the news feed."""
    logger.info("Starting newsfeed...")
    await get_feed().start()
    logger.info("Application started successfully")


async def shutdown() -> None:
    """Gracefully shutdown application."""
    logger.info("Shutting down application...")

    try:
        await reset_feed()
        logger.info("Application shutdown complete")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


app = FastAPI(
    title="newsfeed",
    description="Corporate announcement feed synchronized with a remote news service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "newsfeed.main:app",
        host="0.0.0.0",
        port=8080,
        log_config=None,
        access_log=False,
    )
