"""
Session context.

Explicit holder of "who is calling", passed to the medication and tracking
services instead of a global current-user lookup.

Lifecycle::

    begin(user)   -> initialised for an authenticated user
    switch(user)  -> session changed to another user
    end()         -> torn down (logout)

Every transition is announced on the event bus as a ``SessionChanged``.
"""

from __future__ import annotations

from typing import Optional

from app.core.events import EventBus, SessionChanged, event_bus
from app.core.exceptions import AccessError
from app.models.user import User


class SessionContext:
    """Current authenticated user for a unit of work."""

    def __init__(self, user: Optional[User] = None, bus: EventBus = event_bus):
        self.bus = bus
        self._user: Optional[User] = None
        if user is not None:
            self.begin(user)

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and self._user.id is not None

    def begin(self, user: User) -> None:
        self._user = user
        self.bus.publish(SessionChanged(user_id=user.id, action="begin"))

    def switch(self, user: User) -> None:
        previous = self._user
        self._user = user
        if previous is not None and previous.id != user.id:
            self.bus.publish(SessionChanged(user_id=previous.id, action="end"))
        self.bus.publish(SessionChanged(user_id=user.id, action="switch"))

    def end(self) -> None:
        if self._user is None:
            return
        user_id = self._user.id
        self._user = None
        self.bus.publish(SessionChanged(user_id=user_id, action="end"))

    def require_user(self) -> User:
        if not self.is_authenticated:
            raise AccessError("Not authenticated")
        return self._user

    def require_user_id(self) -> int:
        return self.require_user().id
