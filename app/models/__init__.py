"""SQLModel database models."""

from app.models.user import User
from app.models.medication import Medication
from app.models.medication_log import MedicationLog

__all__ = [
    "User",
    "Medication",
    "MedicationLog",
]
