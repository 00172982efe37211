"""Calendar bucketing helpers shared by budgets and reports.

A bucket is a fixed calendar interval (day, ISO week, month or year)
identified by its first day. Trend series and budget windows are both
expressed in buckets so that they agree on where a period starts.
"""

from __future__ import annotations

from calendar import month_name
from datetime import date, timedelta
from enum import Enum
from typing import Iterator

from fintrack.domain.shared.exceptions import InvalidRangeError


class Interval(str, Enum):
    """Bucket width for trend series and budget periods."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


def ensure_valid_range(start: date, end: date) -> None:
    """Raise InvalidRangeError unless ``start <= end``."""
    if start > end:
        raise InvalidRangeError(start, end)


def bucket_start(day: date, interval: Interval) -> date:
    """Return the first day of the bucket containing ``day``."""
    interval = Interval(interval)
    if interval is Interval.DAILY:
        return day
    if interval is Interval.WEEKLY:
        return day - timedelta(days=day.weekday())
    if interval is Interval.MONTHLY:
        return day.replace(day=1)
    return date(day.year, 1, 1)


def next_bucket(start: date, interval: Interval) -> date:
    """Return the first day of the bucket following the one starting at ``start``."""
    interval = Interval(interval)
    if interval is Interval.DAILY:
        return start + timedelta(days=1)
    if interval is Interval.WEEKLY:
        return start + timedelta(days=7)
    if interval is Interval.MONTHLY:
        if start.month == 12:
            return date(start.year + 1, 1, 1)
        return date(start.year, start.month + 1, 1)
    return date(start.year + 1, 1, 1)


def bucket_end(start: date, interval: Interval) -> date:
    """Return the last day (inclusive) of the bucket starting at ``start``."""
    return next_bucket(start, interval) - timedelta(days=1)


def bucket_key(start: date, interval: Interval) -> str:
    """Stable, sortable identifier of a bucket (e.g. ``2024-01``, ``2024-W05``)."""
    interval = Interval(interval)
    if interval is Interval.DAILY:
        return start.isoformat()
    if interval is Interval.WEEKLY:
        iso_year, iso_week, _ = start.isocalendar()
        return f"{iso_year:04d}-W{iso_week:02d}"
    if interval is Interval.MONTHLY:
        return f"{start.year:04d}-{start.month:02d}"
    return f"{start.year:04d}"


def bucket_label(start: date, interval: Interval) -> str:
    """Human-readable label of a bucket (e.g. ``January 2024``)."""
    interval = Interval(interval)
    if interval is Interval.DAILY:
        return start.strftime("%b %d, %Y")
    if interval is Interval.WEEKLY:
        return f"Week of {start.strftime('%b %d, %Y')}"
    if interval is Interval.MONTHLY:
        return f"{month_name[start.month]} {start.year}"
    return str(start.year)


def iter_buckets(start: date, end: date, interval: Interval) -> Iterator[date]:
    """Yield the start of every bucket touched by ``[start, end]``, in order.

    Raises InvalidRangeError when ``start > end``.
    """
    ensure_valid_range(start, end)
    current = bucket_start(start, interval)
    while current <= end:
        yield current
        current = next_bucket(current, interval)
