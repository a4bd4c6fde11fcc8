"""
Medication log repository.

Handles database operations for :class:`MedicationLog`.  Log entries are
never updated in place; corrections are a delete followed by a create.
"""

import datetime
from typing import Optional

from sqlmodel import Session, col, select

from app.db.repositories.base import gateway_errors
from app.models.medication_log import MedicationLog


class MedicationLogRepository:
    """Repository for MedicationLog database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: MedicationLog) -> MedicationLog:
        """Insert a log entry.

        Raises ``ConflictError`` if the medication already has an entry for
        the same day.
        """
        with gateway_errors(self.session, "log medication", conflict_message="Medication already taken today"):
            self.session.add(entry)
            self.session.commit()
            self.session.refresh(entry)
        return entry

    def get_by_id(self, entry_id: int) -> Optional[MedicationLog]:
        with gateway_errors(self.session, "load medication log"):
            return self.session.get(MedicationLog, entry_id)

    def get_by_user_time_range(
        self, user_id: int, start: datetime.datetime, end: datetime.datetime,
    ) -> list[MedicationLog]:
        """Entries of a user with ``start <= taken_at <= end``, newest first."""
        statement = (
            select(MedicationLog)
            .where(
                MedicationLog.user_id == user_id,
                MedicationLog.taken_at >= start,
                MedicationLog.taken_at <= end,
            )
            .order_by(col(MedicationLog.taken_at).desc(), col(MedicationLog.id).desc())
        )
        with gateway_errors(self.session, "load medication logs"):
            return list(self.session.exec(statement).all())

    def get_for_medication_in_range(
        self, user_id: int, medication_id: int, start: datetime.datetime, end: datetime.datetime,
    ) -> list[MedicationLog]:
        """Entries of one medication within a time window, newest first."""
        statement = (
            select(MedicationLog)
            .where(
                MedicationLog.user_id == user_id,
                MedicationLog.medication_id == medication_id,
                MedicationLog.taken_at >= start,
                MedicationLog.taken_at <= end,
            )
            .order_by(col(MedicationLog.taken_at).desc(), col(MedicationLog.id).desc())
        )
        with gateway_errors(self.session, "load medication logs"):
            return list(self.session.exec(statement).all())

    def get_all_for_medication(self, user_id: int, medication_id: int) -> list[MedicationLog]:
        """Full history of one medication, newest first."""
        statement = (
            select(MedicationLog)
            .where(
                MedicationLog.user_id == user_id,
                MedicationLog.medication_id == medication_id,
            )
            .order_by(col(MedicationLog.taken_at).desc(), col(MedicationLog.id).desc())
        )
        with gateway_errors(self.session, "load medication logs"):
            return list(self.session.exec(statement).all())

    def delete(self, entry_id: int) -> bool:
        with gateway_errors(self.session, "delete medication log"):
            entry = self.session.get(MedicationLog, entry_id)
            if not entry:
                return False
            self.session.delete(entry)
            self.session.commit()
        return True
