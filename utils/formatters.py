"""Formatting utilities for timestamps and address lists."""
import time
from datetime import datetime, timezone


def now_ms():
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def format_timestamp(ts):
    """Format epoch milliseconds (or a datetime) to a human-readable string."""
    if ts is None:
        return "N/A"
    if isinstance(ts, str):
        return ts
    if isinstance(ts, (int, float)):
        ts = datetime.fromtimestamp(ts / 1000, tz=timezone.utc)
    return ts.strftime("%Y-%m-%d %H:%M:%S UTC")


def split_addresses(value):
    """Split a comma/semicolon separated address list. 'a@x, b@y' → ['a@x', 'b@y']."""
    if not value:
        return []
    parts = value.replace(";", ",").split(",")
    return [p.strip() for p in parts if p.strip()]
