"""
Calendar-day boundaries.

Timestamps are stored as naive UTC.  A "day" is a calendar date in the
configured timezone, running from local midnight (inclusive) to the last
microsecond before the next local midnight (inclusive).  These helpers
convert between the two.
"""

from __future__ import annotations

import datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

TzLike = Union[str, datetime.tzinfo]


def resolve_timezone(tz: TzLike) -> datetime.tzinfo:
    """Accept an IANA name or a tzinfo instance."""
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def _as_utc(ts: datetime.datetime) -> datetime.datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=datetime.timezone.utc)
    return ts.astimezone(datetime.timezone.utc)


def local_date_of(ts: datetime.datetime, tz: TzLike) -> datetime.date:
    """Calendar date of *ts* (naive means UTC) in *tz*."""
    return _as_utc(ts).astimezone(resolve_timezone(tz)).date()


def local_today(tz: TzLike, now: Optional[datetime.datetime] = None) -> datetime.date:
    """Today's date in *tz*.  ``now`` defaults to the current UTC time."""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    return local_date_of(now, tz)


def day_bounds(day: datetime.date, tz: TzLike) -> tuple[datetime.datetime, datetime.datetime]:
    """Return ``(start, end)`` of *day* in *tz* as naive UTC datetimes.

    Both ends are inclusive: ``start`` is local midnight and ``end`` is
    23:59:59.999999 local time.
    """
    zone = resolve_timezone(tz)
    start = datetime.datetime.combine(day, datetime.time.min, tzinfo=zone)
    end = datetime.datetime.combine(day, datetime.time.max, tzinfo=zone)
    return (
        start.astimezone(datetime.timezone.utc).replace(tzinfo=None),
        end.astimezone(datetime.timezone.utc).replace(tzinfo=None),
    )
