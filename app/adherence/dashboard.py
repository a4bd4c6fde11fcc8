"""
Daily dashboard view and its cache.

:func:`build_dashboard` joins a user's medications with the day's log into
the dashboard response: progress, time-of-day groups and the last dose.

:class:`DashboardCache` keeps one snapshot per user, for the day last read.
It is subscribed to the event bus and drops a user's snapshot when that
user's medications or logs change, or when the user's session ends.  The
next read reloads both collections in full; snapshots are never patched.
"""

from __future__ import annotations

import datetime
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from app.adherence.grouping import group_by_scheduled_time
from app.adherence.progress import compute_progress, latest_log_by_medication
from app.core.events import EntityChanged, Event, EventBus, SessionChanged, event_bus
from app.schemas.adherence import DashboardResponse, MedicationStatus, TimeGroup
from app.schemas.medication import MedicationResponse
from app.schemas.medication_log import MedicationLogResponse

logger = logging.getLogger(__name__)


def build_dashboard(
    day: datetime.date,
    medications: Sequence[MedicationResponse],
    todays_log: Sequence[MedicationLogResponse],
) -> DashboardResponse:
    progress = compute_progress(medications, todays_log)
    latest = latest_log_by_medication(todays_log)

    groups = []
    for key, meds in group_by_scheduled_time(medications).items():
        statuses = []
        for med in meds:
            log = latest.get(med.id)
            statuses.append(MedicationStatus(
                medication=med,
                taken=log is not None,
                taken_at=log.taken_at if log else None,
                log_id=log.id if log else None,
            ))
        groups.append(TimeGroup(time=key, medications=statuses))

    last_taken_at = max((log.taken_at for log in todays_log), default=None)

    return DashboardResponse(
        date=day,
        progress=progress,
        pending_count=progress.pending_count,
        last_taken_at=last_taken_at,
        groups=groups,
    )


@dataclass(frozen=True)
class DashboardSnapshot:
    """Fetched state for one user and day, plus the dashboard built from it."""

    user_id: int
    day: datetime.date
    medications: list[MedicationResponse]
    todays_log: list[MedicationLogResponse]
    dashboard: DashboardResponse


Loader = Callable[[], tuple[list[MedicationResponse], list[MedicationLogResponse]]]


class DashboardCache:
    """Per-user dashboard snapshots invalidated by change events.

    Each user holds at most one snapshot, for the day last read; reading
    another day replaces it.  Every invalidation bumps the user's
    generation, and a load that started under an older generation is
    returned to its caller but not stored.

    The cache lives in process memory and only sees events published in the
    same process, so the API must run as a single worker.
    """

    def __init__(self, bus: EventBus = event_bus):
        self._snapshots: dict[int, DashboardSnapshot] = {}
        self._generations: dict[int, int] = {}
        self._epoch = 0
        self._lock = threading.Lock()
        self._unsubscribe = bus.subscribe(self._on_event)

    def get(self, user_id: int, day: datetime.date) -> Optional[DashboardSnapshot]:
        with self._lock:
            snapshot = self._snapshots.get(user_id)
        if snapshot is not None and snapshot.day == day:
            return snapshot
        return None

    def get_or_load(self, user_id: int, day: datetime.date, loader: Loader) -> DashboardSnapshot:
        """Return the cached snapshot, or call *loader* and cache its result."""
        with self._lock:
            snapshot = self._snapshots.get(user_id)
            token = self._token(user_id)
        if snapshot is not None and snapshot.day == day:
            return snapshot

        medications, todays_log = loader()
        snapshot = DashboardSnapshot(
            user_id=user_id,
            day=day,
            medications=list(medications),
            todays_log=list(todays_log),
            dashboard=build_dashboard(day, medications, todays_log),
        )
        with self._lock:
            if self._token(user_id) == token:
                self._snapshots[user_id] = snapshot
            else:
                logger.debug("Discarded dashboard snapshot of user %s invalidated while loading", user_id)
        return snapshot

    def invalidate_user(self, user_id: int) -> bool:
        """Drop the snapshot of *user_id*.  Returns whether one was cached."""
        with self._lock:
            self._generations[user_id] = self._generations.get(user_id, 0) + 1
            dropped = self._snapshots.pop(user_id, None) is not None
        if dropped:
            logger.debug("Dropped dashboard snapshot for user %s", user_id)
        return dropped

    def clear(self) -> None:
        with self._lock:
            self._epoch += 1
            self._snapshots.clear()
            self._generations.clear()

    def close(self) -> None:
        """Unsubscribe from the event bus and drop everything."""
        self._unsubscribe()
        self.clear()

    def _token(self, user_id: int) -> tuple[int, int]:
        return self._epoch, self._generations.get(user_id, 0)

    def __len__(self) -> int:
        return len(self._snapshots)

    def _on_event(self, event: Event) -> None:
        if isinstance(event, EntityChanged):
            self.invalidate_user(event.user_id)
        elif isinstance(event, SessionChanged) and event.action == "end":
            self.invalidate_user(event.user_id)


# Application-wide cache, subscribed to the shared event bus
dashboard_cache = DashboardCache()
