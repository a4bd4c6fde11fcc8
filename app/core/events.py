"""
Entity change notifications.

Mutating service operations publish an :class:`EntityChanged` event after
a successful write.  Derived views (see :mod:`app.adherence.dashboard`)
subscribe and drop whatever they cached for the affected user, so the
next read re-fetches from the database.

Session transitions publish :class:`SessionChanged` through the same bus.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Union

logger = logging.getLogger(__name__)

EntityName = Literal["medications", "medication_logs"]
EntityAction = Literal["created", "updated", "deleted"]
SessionAction = Literal["begin", "switch", "end"]


@dataclass(frozen=True)
class EntityChanged:
    """A row of ``entity`` owned by ``user_id`` was written."""

    entity: EntityName
    action: EntityAction
    user_id: int
    entity_id: Optional[int] = None


@dataclass(frozen=True)
class SessionChanged:
    """The session for ``user_id`` started, switched or ended."""

    user_id: int
    action: SessionAction


Event = Union[EntityChanged, SessionChanged]
Handler = Callable[[Event], None]


class EventBus:
    """Synchronous publish/subscribe hub.

    Handlers run in subscription order on the publishing thread.  A handler
    that raises is logged and skipped; the remaining handlers still run.
    """

    def __init__(self) -> None:
        self._handlers: list[Handler] = []
        self._lock = threading.Lock()

    def subscribe(self, handler: Handler) -> Callable[[], None]:
        """Register *handler*.  Returns a callable that unsubscribes it."""
        with self._lock:
            self._handlers.append(handler)

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)

        return unsubscribe

    def publish(self, event: Event) -> None:
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler %r failed for %r", handler, event)

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def clear(self) -> None:
        """Remove all handlers.  Useful for testing."""
        with self._lock:
            self._handlers.clear()


# Application-wide bus
event_bus = EventBus()
