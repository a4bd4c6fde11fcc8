"""
Daily adherence schemas.

Derived, never persisted: computed from a user's medications and the day's
log entries by :mod:`app.adherence`.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from app.schemas.medication import MedicationResponse


class Progress(BaseModel):
    """How many of the user's medications were taken on a day."""

    taken_count: int = Field(..., ge=0)
    total_count: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0, le=100, description="Rounded half up; 0 when there are no medications")

    @computed_field
    @property
    def pending_count(self) -> int:
        return self.total_count - self.taken_count


class MedicationStatus(BaseModel):
    """A medication with its state for the day."""

    medication: MedicationResponse
    taken: bool
    taken_at: Optional[datetime.datetime] = None
    log_id: Optional[int] = None


class TimeGroup(BaseModel):
    """Medications sharing a scheduled time."""

    time: str = Field(..., description="'HH:MM' or 'unscheduled'")
    medications: list[MedicationStatus]


class DashboardResponse(BaseModel):
    """The day's adherence picture."""

    date: datetime.date
    progress: Progress
    pending_count: int
    last_taken_at: Optional[datetime.datetime] = Field(None, description="Most recent dose of the day (UTC)")
    groups: list[TimeGroup]
