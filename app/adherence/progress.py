"""
Progress and "taken today" rules.

All functions are pure: they work on collections that were already fetched
and never touch the database.  Medications need an ``id``; log entries need
``medication_id`` and ``taken_at``.

Rules
-----
- A medication is *taken* on a day if at least one of the day's log
  entries references it.  Several entries for one medication count once.
- Progress is ``taken / total`` as a whole percentage, rounded half up
  (33.33 -> 33, 12.5 -> 13), and 0 when the user has no medications.
- Log entries referencing medications outside the given list are ignored.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from app.schemas.adherence import Progress


def taken_medication_ids(logs: Iterable[Any]) -> set[int]:
    """Ids of all medications referenced by *logs*."""
    return {log.medication_id for log in logs}


def is_taken_today(medication_id: Optional[int], todays_log: Iterable[Any]) -> bool:
    """True if any entry of *todays_log* references *medication_id*."""
    if medication_id is None:
        return False
    return any(log.medication_id == medication_id for log in todays_log)


def latest_log_by_medication(logs: Iterable[Any]) -> dict[int, Any]:
    """Most recent entry per medication id."""
    latest: dict[int, Any] = {}
    for log in logs:
        current = latest.get(log.medication_id)
        if current is None or log.taken_at > current.taken_at:
            latest[log.medication_id] = log
    return latest


def _percentage(taken: int, total: int) -> int:
    if total == 0:
        return 0
    # round(100 * taken / total), halves rounded up, in integer arithmetic
    return (200 * taken + total) // (2 * total)


def compute_progress(medications: Sequence[Any], todays_log: Iterable[Any]) -> Progress:
    """Taken/total counts and percentage for one day."""
    taken_ids = taken_medication_ids(todays_log)
    total = len(medications)
    taken = sum(1 for med in medications if med.id in taken_ids)
    return Progress(taken_count=taken, total_count=total, percentage=_percentage(taken, total))
