"""
Grouping of medications by scheduled time.
"""

from __future__ import annotations

import datetime
from typing import Any, Iterable, Optional, Union

# Bucket for medications without a scheduled time
UNSCHEDULED = "unscheduled"


def time_key(value: Optional[Union[datetime.time, str]]) -> str:
    """Bucket key for a scheduled time: ``"HH:MM"`` or :data:`UNSCHEDULED`."""
    if value is None or value == "":
        return UNSCHEDULED
    if isinstance(value, datetime.time):
        return value.strftime("%H:%M")
    return str(value)


def group_by_scheduled_time(medications: Iterable[Any]) -> dict[str, list[Any]]:
    """Partition *medications* by scheduled time.

    Buckets appear in order of first occurrence; medications keep their
    input order within a bucket.
    """
    groups: dict[str, list[Any]] = {}
    for med in medications:
        groups.setdefault(time_key(getattr(med, "time", None)), []).append(med)
    return groups
