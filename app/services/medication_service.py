"""
Medication service.

The medication registry: the authoritative list of a user's medications
and the only path for creating, updating and deleting them.  Every
successful write is announced on the event bus so cached views of the
user's medications and logs get dropped.
"""

import logging
from typing import Any, Mapping, Union

from sqlmodel import Session

from app.core.clock import utcnow
from app.core.context import SessionContext
from app.core.events import EntityChanged, EventBus, event_bus
from app.core.exceptions import NotFoundError
from app.db.repositories.medication import MedicationRepository
from app.models.medication import Medication
from app.schemas.medication import MedicationCreate, MedicationResponse, MedicationUpdate, parse_form

logger = logging.getLogger(__name__)


class MedicationService:
    """Service for medication business logic."""

    def __init__(self, session: Session, context: SessionContext, bus: EventBus = event_bus):
        self.repository = MedicationRepository(session)
        self.context = context
        self.bus = bus

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_medications(self) -> list[MedicationResponse]:
        """The caller's medications, most recently created first."""
        user_id = self.context.require_user_id()
        medications = self.repository.get_all_by_user(user_id)
        return [self._to_response(m) for m in medications]

    def get(self, medication_id: int) -> MedicationResponse:
        user_id = self.context.require_user_id()
        return self._to_response(self._get_owned(user_id, medication_id))

    def create(self, form_data: Union[MedicationCreate, Mapping[str, Any]]) -> MedicationResponse:
        """Validate *form_data* and store a new medication for the caller.

        Raises:
            ValidationError: If a required field is missing or malformed
            PersistenceError: If the database rejects the write
        """
        user_id = self.context.require_user_id()
        data = parse_form(MedicationCreate, form_data)

        medication = Medication(user_id=user_id, **data.model_dump())
        medication = self.repository.create(medication)
        logger.info("User %s created medication %s", user_id, medication.id)

        self._publish("created", user_id, medication.id)
        return self._to_response(medication)

    def update(self, medication_id: int, partial_data: Union[MedicationUpdate, Mapping[str, Any]]) -> MedicationResponse:
        """Apply only the supplied fields.  ``id`` and ``user_id`` never change."""
        user_id = self.context.require_user_id()
        data = parse_form(MedicationUpdate, partial_data)
        medication = self._get_owned(user_id, medication_id)

        for key, value in data.changes().items():
            setattr(medication, key, value)
        medication.updated_at = utcnow()
        medication = self.repository.update(medication)
        logger.info("User %s updated medication %s", user_id, medication_id)

        self._publish("updated", user_id, medication_id)
        return self._to_response(medication)

    def delete(self, medication_id: int) -> None:
        """Delete a medication and, with it, all of its log entries."""
        user_id = self.context.require_user_id()
        self._get_owned(user_id, medication_id)
        self.repository.delete(medication_id)
        logger.info("User %s deleted medication %s", user_id, medication_id)

        self._publish("deleted", user_id, medication_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned(self, user_id: int, medication_id: int) -> Medication:
        medication = self.repository.get_owned(user_id, medication_id)
        if not medication:
            logger.warning("User %s asked for unknown medication %s", user_id, medication_id)
            raise NotFoundError("Medication not found")
        return medication

    def _publish(self, action: str, user_id: int, medication_id: int) -> None:
        self.bus.publish(EntityChanged(entity="medications", action=action, user_id=user_id,
                                       entity_id=medication_id))

    @staticmethod
    def _to_response(medication: Medication) -> MedicationResponse:
        return MedicationResponse.model_validate(medication)
