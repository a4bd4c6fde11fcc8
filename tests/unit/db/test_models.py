"""
Unit tests for table definitions.
"""

import datetime

import pytest
from sqlalchemy import DateTime

from app.core.clock import utcnow
from app.models.medication import Medication
from app.models.medication_log import MedicationLog
from app.models.user import User


class TestTimestampColumns:
    """Timestamps are stored as naive UTC; the columns must not require tz-aware values."""

    @pytest.mark.parametrize("model, column", [
        (User, "created_at"),
        (User, "last_sign_in_at"),
        (Medication, "created_at"),
        (Medication, "updated_at"),
        (MedicationLog, "taken_at"),
    ])
    def test_plain_naive_datetime(self, model, column):
        column_type = model.__table__.c[column].type
        assert type(column_type) is DateTime
        assert column_type.timezone is False

    def test_utcnow_is_naive(self):
        now = utcnow()
        assert now.tzinfo is None
        aware = datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
        assert abs(aware - now) < datetime.timedelta(seconds=5)

    def test_naive_timestamps_round_trip(self, db_session, user):
        medication = Medication(user_id=user.id, name="Aspirin", dosage="100mg", frequency="once",
                                time=datetime.time(8, 0))
        db_session.add(medication)
        db_session.commit()

        taken_at = datetime.datetime(2026, 10, 19, 9, 30)
        entry = MedicationLog(medication_id=medication.id, user_id=user.id, taken_at=taken_at,
                              taken_on=taken_at.date())
        db_session.add(entry)
        db_session.commit()
        db_session.refresh(entry)
        db_session.refresh(medication)

        assert entry.taken_at == taken_at
        assert medication.created_at.tzinfo is None
