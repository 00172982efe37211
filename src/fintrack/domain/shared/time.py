"""Time utilities for the domain layer."""

from datetime import date, datetime, timezone


def today_utc() -> date:
    """Return current date in UTC."""
    return datetime.now(tz=timezone.utc).date()
