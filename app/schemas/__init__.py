"""Pydantic schemas for request/response validation."""

from app.schemas.token import Token, TokenData
from app.schemas.user import UserCreate, UserLogin, UserResponse
from app.schemas.medication import (
    Frequency,
    MedicationCreate,
    MedicationUpdate,
    MedicationResponse,
)
from app.schemas.medication_log import MarkTakenRequest, MedicationLogResponse
from app.schemas.adherence import DashboardResponse, MedicationStatus, Progress, TimeGroup

__all__ = [
    "Token",
    "TokenData",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "Frequency",
    "MedicationCreate",
    "MedicationUpdate",
    "MedicationResponse",
    "MarkTakenRequest",
    "MedicationLogResponse",
    "DashboardResponse",
    "MedicationStatus",
    "Progress",
    "TimeGroup",
]
