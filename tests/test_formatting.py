"""Test timestamp display formatting."""

from datetime import datetime

import pytest

from newsfeed.presentation import format_last_update, format_timestamp, parse_timestamp


def test_invalid_timestamp_passes_through():
    """Test unparseable text is returned unchanged."""
    assert format_timestamp("not-a-date") == "not-a-date"


def test_missing_timestamp_is_not_available():
    assert format_timestamp(None) == "N/A"
    assert format_timestamp("") == "N/A"


def test_valid_iso_timestamp_is_reformatted():
    """Test a valid ISO timestamp renders differently and non-empty."""
    raw = "2026-10-18T14:05:00"
    formatted = format_timestamp(raw)

    assert formatted
    assert formatted != raw
    assert formatted == "18 Oct 2026, 02:05 pm"


def test_aware_timestamp_converted_to_display_timezone():
    """Test UTC times are shown in the configured timezone."""
    assert format_timestamp("2026-10-18T09:00:00Z") == "18 Oct 2026, 02:30 pm"
    assert format_timestamp("2026-10-18T09:00:00+00:00", "UTC") == "18 Oct 2026, 09:00 am"


def test_exchange_style_timestamp():
    """Test the exchange's DD-Mon-YYYY format is understood."""
    assert format_timestamp("18-Oct-2026 09:15:00") == "18 Oct 2026, 09:15 am"


def test_rfc_2822_timestamp():
    """Test header-style dates are converted like other aware values."""
    assert format_timestamp("Sat, 18 Oct 2026 09:00:00 GMT") == "18 Oct 2026, 02:30 pm"
    assert format_timestamp("Sat, 18 Oct 2026 09:00:00 +0530", "Asia/Kolkata") == (
        "18 Oct 2026, 09:00 am"
    )


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Oct 18, 2026 10:00", "18 Oct 2026, 10:00 am"),
        ("Oct 18, 2026 16:45:30", "18 Oct 2026, 04:45 pm"),
    ],
)
def test_month_first_timestamp(raw, expected):
    assert format_timestamp(raw) == expected


def test_midnight_and_noon():
    assert format_timestamp("2026-10-18T00:10:00") == "18 Oct 2026, 12:10 am"
    assert format_timestamp("2026-10-18T12:00:00") == "18 Oct 2026, 12:00 pm"


def test_unknown_timezone_never_raises():
    """Test conversion errors degrade to passthrough."""
    raw = "2026-10-18T09:00:00Z"
    assert format_timestamp(raw, "Not/AZone") == raw


@pytest.mark.parametrize("value", ["   ", "2026-13-45", "yesterday", "18/10"])
def test_parse_timestamp_rejects_garbage(value):
    assert parse_timestamp(value) is None


def test_format_last_update():
    assert format_last_update(None) is None
    assert format_last_update(datetime(2026, 10, 18, 7, 4, 59)) == "Updated 07:04"
