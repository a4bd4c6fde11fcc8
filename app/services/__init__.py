"""Business logic services."""

from app.services.user_service import UserService
from app.services.medication_service import MedicationService
from app.services.tracking_service import MedicationTrackingService

__all__ = [
    "UserService",
    "MedicationService",
    "MedicationTrackingService",
]
