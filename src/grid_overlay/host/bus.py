"""Minimal publish/subscribe bus for host notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Topic:
    """Notification names published by the host."""
    EDITABLE_ACTIVATED = "editable.activated"
    EDITABLE_DESTROYED = "editable.destroyed"
    FLOATING_CHANGED = "floating.changed"
    SELECTION_CONTEXT_CHANGE = "selection.context-change"
    STYLE_APPLIED = "style.applied"


@dataclass
class Message:
    """A published notification."""
    topic: str
    data: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


Subscriber = Callable[[Message], None]


class MessageBus:
    """Synchronous bus: subscribers run in subscription order on publish."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscriber]] = {}

    def subscribe(self, topic: str, subscriber: Subscriber) -> Callable[[], None]:
        """Subscribe to topic. Returns a function that unsubscribes."""
        self._subscribers.setdefault(topic, []).append(subscriber)

        def unsubscribe() -> None:
            subscribers = self._subscribers.get(topic, [])
            if subscriber in subscribers:
                subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, topic: str, **data: Any) -> Message:
        message = Message(topic, data)
        subscribers = list(self._subscribers.get(topic, []))
        logger.debug("publish %s to %d subscriber(s)", topic, len(subscribers))
        for subscriber in subscribers:
            subscriber(message)
        return message

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, []))
