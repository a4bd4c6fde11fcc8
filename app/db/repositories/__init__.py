"""Database repositories."""

from app.db.repositories.user import UserRepository
from app.db.repositories.medication import MedicationRepository
from app.db.repositories.medication_log import MedicationLogRepository

__all__ = [
    "UserRepository",
    "MedicationRepository",
    "MedicationLogRepository",
]
