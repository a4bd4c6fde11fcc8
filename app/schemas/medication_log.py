"""
Medication log API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MarkTakenRequest(BaseModel):
    """Optional body for marking a medication as taken."""

    note: Optional[str] = Field(None, max_length=1000, description="Free-text note for this dose")


class MedicationLogResponse(BaseModel):
    """A dose log entry."""

    id: int
    medication_id: int
    user_id: int
    taken_at: datetime.datetime = Field(..., description="When the dose was taken (UTC)")
    taken_on: datetime.date = Field(..., description="Calendar day of the dose in the configured timezone")
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
