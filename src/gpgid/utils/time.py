"""
Time utilities for signature timestamps.
OpenPGP timestamps carry whole seconds, so values are truncated to seconds.
"""

from datetime import datetime, timezone

from ..config import TIMESTAMP_FORMAT


def now() -> datetime:
    """
    Get the current UTC time, truncated to whole seconds.

    Returns:
        Timezone-aware datetime
    """
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as an ISO 8601 UTC string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)

