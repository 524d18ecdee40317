"""Publish/subscribe notifications for transaction changes."""

from datetime import datetime
from typing import Callable, NamedTuple

__all__ = [
    "Event",
    "EventBus",
    "TRANSACTION_ADDED",
    "TRANSACTION_DELETED",
    "TRANSACTIONS_CHANGED",
]

TRANSACTION_ADDED = "transaction_added"
TRANSACTION_DELETED = "transaction_deleted"
TRANSACTIONS_CHANGED = "transactions_changed"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event], None]


class EventBus:
    """In-process event bus. Create one and pass it to the services that share it."""

    def __init__(self):
        self._subscribers: dict[str, list[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> Callable[[], None]:
        """Register handler for events called name. Returns an unsubscribe callable."""
        self._subscribers.setdefault(name, []).append(handler)
        return lambda: self.unsubscribe(name, handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict | None = None) -> int:
        """Deliver an event to every handler of name. Returns the number of handlers called."""
        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload or {})
        handlers = list(self._subscribers.get(name, []))
        for handler in handlers:
            handler(event)
        return len(handlers)
