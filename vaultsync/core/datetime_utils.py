"""Datetime utilities for consistent timezone handling."""

from datetime import datetime, timezone


def utc_now_naive() -> datetime:
    """Get current UTC time as naive datetime for database operations.

    Note:
        The columns are TIMESTAMP WITHOUT TIME ZONE, so the tzinfo is stripped.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
