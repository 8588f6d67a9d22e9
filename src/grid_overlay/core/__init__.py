"""Core data structures: elements, documents, events, keys and colors."""

from grid_overlay.core.color import Color
from grid_overlay.core.document import Document
from grid_overlay.core.element import Display, Element, Offset, PositionMode, Style
from grid_overlay.core.events import Event, EventTarget, EventType, Priority
from grid_overlay.core.keys import Key, KeyEvent, MouseEvent

__all__ = [
    "Color",
    "Document",
    "Display",
    "Element",
    "Offset",
    "PositionMode",
    "Style",
    "Event",
    "EventTarget",
    "EventType",
    "Priority",
    "Key",
    "KeyEvent",
    "MouseEvent",
]
