"""
Medication repository.

Handles database operations for the Medication model.  Reads are always
scoped by owning user.
"""

from typing import Optional

from sqlmodel import Session, col, select

from app.db.repositories.base import gateway_errors
from app.models.medication import Medication
from app.models.medication_log import MedicationLog


class MedicationRepository:
    """Repository for Medication database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, medication: Medication) -> Medication:
        with gateway_errors(self.session, "create medication"):
            self.session.add(medication)
            self.session.commit()
            self.session.refresh(medication)
        return medication

    def get_by_id(self, medication_id: int) -> Optional[Medication]:
        with gateway_errors(self.session, "load medication"):
            return self.session.get(Medication, medication_id)

    def get_owned(self, user_id: int, medication_id: int) -> Optional[Medication]:
        """Get a medication only if it belongs to *user_id*."""
        statement = select(Medication).where(
            Medication.id == medication_id,
            Medication.user_id == user_id,
        )
        with gateway_errors(self.session, "load medication"):
            return self.session.exec(statement).first()

    def get_all_by_user(self, user_id: int) -> list[Medication]:
        """All medications of a user, most recently created first."""
        statement = (
            select(Medication)
            .where(Medication.user_id == user_id)
            .order_by(col(Medication.created_at).desc(), col(Medication.id).desc())
        )
        with gateway_errors(self.session, "list medications"):
            return list(self.session.exec(statement).all())

    def update(self, medication: Medication) -> Medication:
        with gateway_errors(self.session, "update medication"):
            self.session.add(medication)
            self.session.commit()
            self.session.refresh(medication)
        return medication

    def delete(self, medication_id: int) -> bool:
        """Delete a medication together with its log entries."""
        with gateway_errors(self.session, "delete medication"):
            medication = self.session.get(Medication, medication_id)
            if not medication:
                return False
            logs = self.session.exec(select(MedicationLog).where(MedicationLog.medication_id == medication_id))
            for log in logs.all():
                self.session.delete(log)
            self.session.flush()
            self.session.delete(medication)
            self.session.commit()
        return True
