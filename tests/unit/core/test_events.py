"""
Unit tests for the event bus.
"""

from app.core.events import EntityChanged, EventBus, SessionChanged


def _event(user_id: int = 1) -> EntityChanged:
    return EntityChanged(entity="medications", action="created", user_id=user_id, entity_id=7)


class TestEventBus:

    def test_handlers_receive_events_in_order(self):
        bus = EventBus()
        received = []
        bus.subscribe(lambda e: received.append(("first", e)))
        bus.subscribe(lambda e: received.append(("second", e)))

        event = _event()
        bus.publish(event)

        assert received == [("first", event), ("second", event)]

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe(received.append)
        unsubscribe()
        bus.publish(_event())
        assert received == []
        # Second call is a no-op
        unsubscribe()

    def test_failing_handler_does_not_stop_others(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(broken)
        bus.subscribe(received.append)
        bus.publish(_event())

        assert len(received) == 1

    def test_session_events(self):
        bus = EventBus()
        received = []
        bus.subscribe(received.append)
        bus.publish(SessionChanged(user_id=3, action="end"))
        assert received == [SessionChanged(user_id=3, action="end")]

    def test_clear(self):
        bus = EventBus()
        bus.subscribe(lambda e: None)
        bus.clear()
        assert bus.subscriber_count == 0
