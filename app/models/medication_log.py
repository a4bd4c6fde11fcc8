"""
Medication log database model.

A log entry records that a dose of a medication was taken.  ``taken_at``
is stored in UTC; ``taken_on`` is the calendar date of ``taken_at`` in the
configured timezone and backs the one-dose-per-day constraint.
"""

import datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


class MedicationLog(SQLModel, table=True):
    """A single "taken" event for a medication."""

    __tablename__ = "medication_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "medication_id", "taken_on", name="uq_medication_log_user_med_day"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    medication_id: int = Field(foreign_key="medications.id", ondelete="CASCADE", nullable=False, index=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    taken_at: datetime.datetime = Field(sa_type=DateTime, nullable=False, index=True)
    taken_on: datetime.date = Field(nullable=False)
    notes: Optional[str] = Field(default=None, max_length=1000)
