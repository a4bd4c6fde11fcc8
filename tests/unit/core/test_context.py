"""
Unit tests for the session context lifecycle.
"""

import pytest

from app.core.context import SessionContext
from app.core.events import EventBus, SessionChanged
from app.core.exceptions import AccessError
from app.models.user import User


@pytest.fixture
def received():
    return []


@pytest.fixture
def bus(received):
    bus = EventBus()
    bus.subscribe(received.append)
    return bus


def _user(user_id: int) -> User:
    return User(id=user_id, email=f"user{user_id}@example.com", hashed_password="x")


class TestSessionContext:

    def test_anonymous_context_rejects_access(self, bus):
        context = SessionContext(bus=bus)
        assert not context.is_authenticated
        with pytest.raises(AccessError):
            context.require_user_id()

    def test_begin(self, bus, received):
        context = SessionContext(_user(1), bus=bus)
        assert context.require_user_id() == 1
        assert received == [SessionChanged(user_id=1, action="begin")]

    def test_switch_ends_previous_user(self, bus, received):
        context = SessionContext(_user(1), bus=bus)
        context.switch(_user(2))
        assert context.require_user_id() == 2
        assert received[1:] == [
            SessionChanged(user_id=1, action="end"),
            SessionChanged(user_id=2, action="switch"),
        ]

    def test_end(self, bus, received):
        context = SessionContext(_user(1), bus=bus)
        context.end()
        assert context.user is None
        assert received[-1] == SessionChanged(user_id=1, action="end")
        with pytest.raises(AccessError):
            context.require_user()

    def test_end_twice_is_noop(self, bus, received):
        context = SessionContext(_user(1), bus=bus)
        context.end()
        context.end()
        assert len(received) == 2

    def test_unsaved_user_is_not_authenticated(self, bus):
        context = SessionContext(bus=bus)
        context._user = User(email="new@example.com", hashed_password="x")
        with pytest.raises(AccessError):
            context.require_user_id()
