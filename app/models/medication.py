"""
Medication database model.

A medication is a user-defined drug entry with dosage and schedule
metadata.  Rows are always scoped to their owning user.
"""

import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class Medication(SQLModel, table=True):
    """A medication a user takes on a schedule."""

    __tablename__ = "medications"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    name: str = Field(nullable=False, max_length=255)
    dosage: str = Field(nullable=False, max_length=255)
    # One of app.schemas.medication.Frequency
    frequency: str = Field(nullable=False, max_length=32)
    time: datetime.time = Field(nullable=False)
    notes: Optional[str] = Field(default=None, max_length=1000)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False, index=True)
    updated_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False)
