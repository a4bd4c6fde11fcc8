"""
Integration tests for the medication registry service.
"""

import datetime

import pytest

from app.core.context import SessionContext
from app.core.events import EntityChanged
from app.core.exceptions import AccessError, NotFoundError, ValidationError
from app.services.medication_service import MedicationService


@pytest.fixture
def events(bus):
    received = []
    bus.subscribe(received.append)
    return received


@pytest.fixture
def other_service(db_session, other_user, bus):
    return MedicationService(db_session, SessionContext(other_user, bus=bus), bus=bus)


class TestCreateAndList:

    def test_create_returns_assigned_id(self, medication_service, medication_form, user):
        created = medication_service.create(medication_form)
        assert created.id is not None
        assert created.user_id == user.id
        assert created.name == "Aspirin"
        assert created.dosage == "100mg"
        assert created.frequency == "once"
        assert created.time == datetime.time(8, 0)
        assert created.notes == "After breakfast"

    def test_list_includes_created_fields_unchanged(self, medication_service, medication_form):
        created = medication_service.create(medication_form)
        listed = medication_service.list_medications()
        assert listed == [created]

    def test_list_most_recent_first(self, medication_service, medication_form):
        first = medication_service.create(medication_form)
        second = medication_service.create({**medication_form, "name": "Metformin"})
        third = medication_service.create({**medication_form, "name": "Vitamin D", "time": "20:00"})
        assert [m.id for m in medication_service.list_medications()] == [third.id, second.id, first.id]

    def test_list_scoped_to_owner(self, medication_service, other_service, medication_form):
        medication_service.create(medication_form)
        assert other_service.list_medications() == []

    def test_invalid_form(self, medication_service, medication_form):
        medication_form["dosage"] = ""
        with pytest.raises(ValidationError) as exc_info:
            medication_service.create(medication_form)
        assert exc_info.value.fields == ["dosage"]
        assert medication_service.list_medications() == []

    def test_create_publishes_event(self, medication_service, medication_form, events, user):
        created = medication_service.create(medication_form)
        assert EntityChanged(entity="medications", action="created", user_id=user.id,
                             entity_id=created.id) in events

    def test_unauthenticated(self, db_session, bus, medication_form):
        service = MedicationService(db_session, SessionContext(bus=bus), bus=bus)
        with pytest.raises(AccessError):
            service.list_medications()
        with pytest.raises(AccessError):
            service.create(medication_form)


class TestUpdate:

    def test_applies_only_supplied_fields(self, medication_service, medication_form):
        created = medication_service.create(medication_form)
        updated = medication_service.update(created.id, {"dosage": "200mg"})
        assert updated.dosage == "200mg"
        assert updated.name == "Aspirin"
        assert updated.notes == "After breakfast"

    def test_identifier_and_owner_immutable(self, medication_service, medication_form, user, other_user):
        created = medication_service.create(medication_form)
        updated = medication_service.update(created.id, {"id": created.id + 100, "user_id": other_user.id,
                                                         "name": "Aspirin Forte"})
        assert updated.id == created.id
        assert updated.user_id == user.id
        assert updated.name == "Aspirin Forte"

    def test_unknown_id(self, medication_service):
        with pytest.raises(NotFoundError):
            medication_service.update(999, {"dosage": "1mg"})

    def test_not_owner(self, medication_service, other_service, medication_form):
        created = medication_service.create(medication_form)
        with pytest.raises(NotFoundError):
            other_service.update(created.id, {"dosage": "1mg"})
        assert medication_service.get(created.id).dosage == "100mg"

    def test_publishes_event(self, medication_service, medication_form, events):
        created = medication_service.create(medication_form)
        medication_service.update(created.id, {"time": "09:15"})
        assert events[-1].action == "updated"
        assert events[-1].entity_id == created.id


class TestDelete:

    def test_removes_from_list(self, medication_service, medication_form):
        created = medication_service.create(medication_form)
        medication_service.delete(created.id)
        assert medication_service.list_medications() == []
        with pytest.raises(NotFoundError):
            medication_service.get(created.id)

    def test_unknown_id(self, medication_service):
        with pytest.raises(NotFoundError):
            medication_service.delete(999)

    def test_not_owner(self, medication_service, other_service, medication_form):
        created = medication_service.create(medication_form)
        with pytest.raises(NotFoundError):
            other_service.delete(created.id)
        assert len(medication_service.list_medications()) == 1

    def test_publishes_event(self, medication_service, medication_form, events):
        created = medication_service.create(medication_form)
        medication_service.delete(created.id)
        assert events[-1] == EntityChanged(entity="medications", action="deleted",
                                           user_id=created.user_id, entity_id=created.id)
