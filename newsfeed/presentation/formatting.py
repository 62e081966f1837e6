"""Display formatting for announcement times."""

from datetime import datetime
from email.utils import parsedate_to_datetime
from zoneinfo import ZoneInfo

NOT_AVAILABLE = "N/A"

# Formats seen from exchange feeds besides ISO 8601
FALLBACK_FORMATS = (
    "%d-%b-%Y %H:%M:%S",
    "%d-%b-%Y %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%b %d, %Y %H:%M:%S",
    "%b %d, %Y %H:%M",
)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an announcement timestamp.

    Args:
        value: Timestamp text from the news service

    Returns:
        Parsed datetime, or None if the text is not a recognised format
    """
    text = value.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    for fmt in FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    # RFC 2822, as sent in HTTP and mail headers
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError):
        return None


def format_timestamp(value: str | None, timezone: str = "Asia/Kolkata") -> str:
    """Render a timestamp as ``DD Mon YYYY, hh:mm am``.

    Timezone-aware values are converted to ``timezone``; naive values are shown
    as given. Anything that cannot be parsed or converted is returned unchanged.

    Args:
        value: Timestamp text from the news service
        timezone: IANA timezone for display

    Returns:
        Display string, never raises
    """
    if not value:
        return NOT_AVAILABLE

    try:
        parsed = parse_timestamp(value)
        if parsed is None:
            return value
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(ZoneInfo(timezone))
        meridiem = "am" if parsed.hour < 12 else "pm"
        return f"{parsed:%d %b %Y, %I:%M} {meridiem}"
    except Exception:
        return value


def format_last_update(last_update: datetime | None) -> str | None:
    """Render the last successful load as ``Updated HH:MM``.

    Args:
        last_update: Completion time of the last successful load

    Returns:
        Display string, or None before the first successful load
    """
    if last_update is None:
        return None
    return f"Updated {last_update:%H:%M}"
