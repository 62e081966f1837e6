"""CLI for serving and inspecting the announcement feed."""

import asyncio
from pathlib import Path

import typer
from loguru import logger

from newsfeed.config import Config, load_config
from newsfeed.feed import NewsFeed
from newsfeed.presentation.view import FeedView

app = typer.Typer(
    name="newsfeed",
    help="Corporate announcement feed synchronized with a remote news service",
)


def _settings(config_path: Path | None, base_url: str | None) -> Config:
    settings = load_config(config_path) if config_path else load_config()
    if base_url:
        settings.news_service.base_url = base_url
    return settings


def _print_view(view: FeedView) -> None:
    if view.last_updated:
        typer.echo(view.last_updated)

    if view.mode == "empty":
        typer.echo("No announcements available")
        typer.echo("Check back in a few minutes")
        return

    for card in view.cards:
        badges = f"[{card.source}] [{card.symbol}]"
        if card.impact:
            badges += f" [{card.impact.label}]"
        typer.echo(f"{badges} {card.headline}")
        typer.echo(f"    {card.company} | {card.time}")

    if view.footer:
        typer.echo(view.footer)


def _print_notifications(feed: NewsFeed) -> None:
    for notification in feed.notification_service.recent():
        prefix = "✔" if notification.level == "success" else "✘"
        typer.echo(f"{prefix} {notification.message}")


async def _fetch(settings: Config) -> tuple[bool, NewsFeed]:
    feed = NewsFeed(settings)
    await feed.start(poll=False, initial_load=False)
    try:
        ok = await feed.reload(notify_on_success=True)
        await feed.event_bus.join()
    finally:
        await feed.stop()
    return ok, feed


async def _refresh(settings: Config) -> tuple[bool, NewsFeed]:
    feed = NewsFeed(settings)
    await feed.start(poll=False, initial_load=False)
    try:
        ok = await feed.refresh()
        await feed.refresher.wait_for_reloads()
        ok = ok and feed.state.last_update is not None
        await feed.event_bus.join()
    finally:
        await feed.stop()
    return ok, feed


@app.command("fetch")
def fetch_command(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),  # noqa: B008
    base_url: str | None = typer.Option(None, help="News service root URL"),
    as_json: bool = typer.Option(False, "--json", help="Print the view as JSON"),
) -> None:
    """Load the feed once and print it."""
    settings = _settings(config_path, base_url)
    ok, feed = asyncio.run(_fetch(settings))

    if as_json:
        typer.echo(feed.view().model_dump_json(indent=2))
    else:
        _print_notifications(feed)
        if ok:
            _print_view(feed.view())

    if not ok:
        raise typer.Exit(code=1)


@app.command("refresh")
def refresh_command(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),  # noqa: B008
    base_url: str | None = typer.Option(None, help="News service root URL"),
    delay: float | None = typer.Option(None, help="Seconds to wait before reloading"),
) -> None:
    """Ask the service to regenerate, wait, then print the reloaded feed."""
    settings = _settings(config_path, base_url)
    if delay is not None:
        settings.sync.refresh_delay_seconds = delay
    ok, feed = asyncio.run(_refresh(settings))

    _print_notifications(feed)
    if feed.state.last_update is not None:
        _print_view(feed.view())

    if not ok:
        raise typer.Exit(code=1)


@app.command("serve")
def serve_command(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(8080, help="Bind port"),
) -> None:
    """Run the HTTP view with polling enabled."""
    import uvicorn

    logger.info(f"Serving newsfeed on {host}:{port}")
    uvicorn.run(
        "newsfeed.main:app",
        host=host,
        port=port,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    app()
