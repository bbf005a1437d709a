"""Tests for formatting helpers."""
from datetime import datetime, timezone

from utils.formatters import format_timestamp, split_addresses


def test_format_timestamp_ms():
    assert format_timestamp(0) == "1970-01-01 00:00:00 UTC"
    assert format_timestamp(86_400_000) == "1970-01-02 00:00:00 UTC"


def test_format_timestamp_other():
    assert format_timestamp(None) == "N/A"
    assert format_timestamp(datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)) == "2024-05-01 12:30:00 UTC"


def test_split_addresses():
    assert split_addresses("a@x, b@y;c@z") == ["a@x", "b@y", "c@z"]
    assert split_addresses("") == []
    assert split_addresses(None) == []
    assert split_addresses(" , ") == []
