"""
Medication tracking service.

Records dose events ("taken") and derives the day's adherence picture.

A medication can be marked as taken at most once per calendar day; the
second attempt raises ``ConflictError``.  The check runs here first and the
``(user_id, medication_id, taken_on)`` unique constraint catches racing
requests.  Undo removes the day's entry again.

Derived views (``is_taken_today``, ``progress``, ``dashboard``) read from
the dashboard cache, which is refilled only after a change event drops it.
"""

import datetime
import logging
from typing import Callable, Optional, Sequence

from sqlmodel import Session

from app.adherence.dashboard import DashboardCache, DashboardSnapshot, dashboard_cache
from app.adherence.day import TzLike, day_bounds, local_date_of, local_today, resolve_timezone
from app.adherence.grouping import group_by_scheduled_time
from app.adherence.progress import compute_progress, is_taken_today
from app.core.clock import utcnow
from app.core.config import settings
from app.core.context import SessionContext
from app.core.events import EntityChanged, EventBus, event_bus
from app.core.exceptions import ConflictError, NotFoundError
from app.db.repositories.medication import MedicationRepository
from app.db.repositories.medication_log import MedicationLogRepository
from app.models.medication_log import MedicationLog
from app.schemas.adherence import DashboardResponse, Progress
from app.schemas.medication import MedicationResponse
from app.schemas.medication_log import MedicationLogResponse

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]


class MedicationTrackingService:
    """Service for dose logging and daily adherence."""

    def __init__(
        self,
        session: Session,
        context: SessionContext,
        bus: EventBus = event_bus,
        cache: DashboardCache = dashboard_cache,
        clock: Clock = utcnow,
        tz: Optional[TzLike] = None,
    ):
        self.log_repository = MedicationLogRepository(session)
        self.medication_repository = MedicationRepository(session)
        self.context = context
        self.bus = bus
        self.cache = cache
        self.clock = clock
        self.tz = resolve_timezone(tz or settings.TIMEZONE)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def mark_taken(self, medication_id: int, note: Optional[str] = None) -> MedicationLogResponse:
        """Log a dose of *medication_id* stamped with the current time.

        Raises:
            NotFoundError: If the medication does not exist or is not the caller's
            ConflictError: If the medication was already taken today
        """
        user_id = self.context.require_user_id()
        self._require_owned_medication(user_id, medication_id)

        now = self.clock()
        today = local_date_of(now, self.tz)
        start, end = day_bounds(today, self.tz)
        if self.log_repository.get_for_medication_in_range(user_id, medication_id, start, end):
            logger.warning("User %s marked medication %s as taken twice on %s", user_id, medication_id, today)
            raise ConflictError("Medication already taken today")

        entry = MedicationLog(medication_id=medication_id, user_id=user_id, taken_at=now, taken_on=today,
                              notes=note)
        entry = self.log_repository.create(entry)
        logger.info("User %s took medication %s (log %s)", user_id, medication_id, entry.id)

        self._publish("created", user_id, entry.id)
        return self._to_response(entry)

    def undo_taken(self, medication_id: int) -> None:
        """Delete today's entry for *medication_id*.

        Raises:
            NotFoundError: If there is no entry for today
        """
        user_id = self.context.require_user_id()
        start, end = day_bounds(self._today(), self.tz)
        entries = self.log_repository.get_for_medication_in_range(user_id, medication_id, start, end)
        if not entries:
            raise NotFoundError("Medication has not been taken today")

        for entry in entries:
            self.log_repository.delete(entry.id)
            logger.info("User %s undid log %s of medication %s", user_id, entry.id, medication_id)
            self._publish("deleted", user_id, entry.id)

    def delete_log(self, log_id: int) -> None:
        """Delete a specific log entry owned by the caller."""
        user_id = self.context.require_user_id()
        entry = self.log_repository.get_by_id(log_id)
        if not entry or entry.user_id != user_id:
            raise NotFoundError("Medication log not found")
        self.log_repository.delete(log_id)
        logger.info("User %s deleted log %s", user_id, log_id)

        self._publish("deleted", user_id, log_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def todays_log(self, day: Optional[datetime.date] = None) -> list[MedicationLogResponse]:
        """The caller's entries for *day* (default today), newest first."""
        user_id = self.context.require_user_id()
        return self._fetch_day_log(user_id, day or self._today())

    def history_for(self, medication_id: int) -> list[MedicationLogResponse]:
        """All entries for one medication, newest first, regardless of day."""
        user_id = self.context.require_user_id()
        self._require_owned_medication(user_id, medication_id)
        entries = self.log_repository.get_all_for_medication(user_id, medication_id)
        return [self._to_response(e) for e in entries]

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def snapshot(self, day: Optional[datetime.date] = None) -> DashboardSnapshot:
        """Cached medications and day log for the caller."""
        user_id = self.context.require_user_id()
        day = day or self._today()

        def load() -> tuple[list[MedicationResponse], list[MedicationLogResponse]]:
            medications = [MedicationResponse.model_validate(m)
                           for m in self.medication_repository.get_all_by_user(user_id)]
            return medications, self._fetch_day_log(user_id, day)

        return self.cache.get_or_load(user_id, day, load)

    def is_taken_today(self, medication_id: int) -> bool:
        return is_taken_today(medication_id, self.snapshot().todays_log)

    def progress(
        self,
        medications: Optional[Sequence[MedicationResponse]] = None,
        todays_log: Optional[Sequence[MedicationLogResponse]] = None,
    ) -> Progress:
        """Progress for the given collections, or for the cached day view."""
        if medications is None or todays_log is None:
            snapshot = self.snapshot()
            medications = snapshot.medications if medications is None else medications
            todays_log = snapshot.todays_log if todays_log is None else todays_log
        return compute_progress(medications, todays_log)

    @staticmethod
    def group_by_scheduled_time(medications: Sequence[MedicationResponse]) -> dict[str, list[MedicationResponse]]:
        return group_by_scheduled_time(medications)

    def dashboard(self, day: Optional[datetime.date] = None) -> DashboardResponse:
        return self.snapshot(day).dashboard

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _today(self) -> datetime.date:
        return local_today(self.tz, self.clock())

    def _fetch_day_log(self, user_id: int, day: datetime.date) -> list[MedicationLogResponse]:
        start, end = day_bounds(day, self.tz)
        entries = self.log_repository.get_by_user_time_range(user_id, start, end)
        return [self._to_response(e) for e in entries]

    def _require_owned_medication(self, user_id: int, medication_id: int) -> None:
        if not self.medication_repository.get_owned(user_id, medication_id):
            raise NotFoundError("Medication not found")

    def _publish(self, action: str, user_id: int, log_id: Optional[int]) -> None:
        self.bus.publish(EntityChanged(entity="medication_logs", action=action, user_id=user_id, entity_id=log_id))

    @staticmethod
    def _to_response(entry: MedicationLog) -> MedicationLogResponse:
        return MedicationLogResponse.model_validate(entry)
