"""Event model with bubbling and explicit listener priority.

Events travel from their target up through each ancestor to the document.
At every node, listeners run from the highest priority down, ties in
registration order. A listener that calls ``stop_propagation`` lets the
remaining listeners on the current node finish, then ends the dispatch;
``stop_immediate_propagation`` ends it at once.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Callable, Iterator, Optional

from grid_overlay.core.keys import Key, KeyEvent


class EventType(Enum):
    """Kinds of events a target can listen for."""
    CLICK = auto()
    KEY_DOWN = auto()
    KEY_UP = auto()
    MOUSE_OVER = auto()
    MOUSE_OUT = auto()


class Priority(IntEnum):
    """Dispatch priority within a single node."""
    LOW = -100
    NORMAL = 0
    OVERLAY = 100  # Floating widgets that must see input before the page


@dataclass
class Event:
    """A dispatched event."""
    type: EventType
    target: "EventTarget"
    key_event: Optional[KeyEvent] = None
    current_target: Optional["EventTarget"] = None
    propagation_stopped: bool = False
    immediate_stopped: bool = False
    default_prevented: bool = False

    @property
    def key(self) -> Optional[Key]:
        return self.key_event.key if self.key_event else None

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    def stop_immediate_propagation(self) -> None:
        self.propagation_stopped = True
        self.immediate_stopped = True

    def prevent_default(self) -> None:
        self.default_prevented = True


Handler = Callable[[Event], None]

_sequence = itertools.count()


@dataclass(order=True)
class _Listener:
    sort_key: tuple[int, int]
    handler: Handler = field(compare=False)


class EventTarget:
    """Base for anything events can be dispatched through."""

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[_Listener]] = {}

    @property
    def parent_target(self) -> Optional[EventTarget]:
        """Next node on the bubbling path."""
        return None

    def add_listener(
        self,
        event_type: EventType,
        handler: Handler,
        priority: int = Priority.NORMAL,
    ) -> None:
        """Register handler for event_type on this node."""
        listeners = self._listeners.setdefault(event_type, [])
        listeners.append(_Listener((-int(priority), next(_sequence)), handler))
        listeners.sort()

    def remove_listener(self, event_type: EventType, handler: Handler) -> bool:
        """Unregister handler. Returns True if it was registered."""
        listeners = self._listeners.get(event_type, [])
        for listener in listeners:
            if listener.handler == handler:
                listeners.remove(listener)
                return True
        return False

    def listener_count(self, event_type: EventType) -> int:
        return len(self._listeners.get(event_type, []))

    def iter_path(self) -> Iterator[EventTarget]:
        """Yield this node and every ancestor up to the root."""
        node: Optional[EventTarget] = self
        while node is not None:
            yield node
            node = node.parent_target

    def dispatch(self, event: Event) -> Event:
        """Bubble event from this node to the root."""
        for node in self.iter_path():
            event.current_target = node
            # Copy so handlers may unregister themselves mid-dispatch
            for listener in list(node._listeners.get(event.type, [])):
                listener.handler(event)
                if event.immediate_stopped:
                    break
            if event.propagation_stopped:
                break
        event.current_target = None
        return event
