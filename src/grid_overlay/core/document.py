"""Document - the root of an element tree and the entry point for input."""

from __future__ import annotations

from typing import Optional

from grid_overlay.core.element import Element, Offset
from grid_overlay.core.events import Event, EventTarget, EventType
from grid_overlay.core.keys import Key, KeyEvent


class Document(EventTarget):
    """
    Root event target owning a body element, a scroll position and the
    pointer hover state.

    Input from a terminal (or a test) enters through `click`, `key_down`,
    `key_up` and `move_pointer`, which build events and bubble them from
    the target element up to the document.
    """

    def __init__(self, width: int = 80, height: int = 24) -> None:
        super().__init__()
        self.body = Element("body", width=width, height=height)
        self.body._owner = self
        self.scroll_top = 0
        self.scroll_left = 0
        self.active_element: Optional[Element] = None
        self._hovered: Optional[Element] = None

    def resize(self, width: int, height: int) -> None:
        self.body.width = width
        self.body.height = height

    def scroll_to(self, top: int, left: int = 0) -> None:
        self.scroll_top = max(0, top)
        self.scroll_left = max(0, left)

    def to_page(self, row: int, col: int) -> Offset:
        """Convert a viewport position to document coordinates."""
        return Offset(row + self.scroll_top, col + self.scroll_left)

    # -------------------------------------------------------------------------
    # Hit testing
    # -------------------------------------------------------------------------

    def element_at(self, top: int, left: int) -> Element:
        """Deepest element at a page position (the body if nothing else)."""
        return self.body.hit_test(top, left) or self.body

    def element_at_viewport(self, row: int, col: int) -> Element:
        page = self.to_page(row, col)
        return self.element_at(page.top, page.left)

    @property
    def hovered(self) -> Optional[Element]:
        return self._hovered

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def click(self, target: Optional[Element] = None) -> Event:
        """Dispatch a click on target (the body by default)."""
        target = target or self.body
        return target.dispatch(Event(EventType.CLICK, target))

    def click_at(self, row: int, col: int) -> Event:
        """Move the pointer to a viewport position and click there."""
        self.move_pointer(row, col)
        return self.click(self.element_at_viewport(row, col))

    def key_down(self, key_event: KeyEvent | Key) -> Event:
        return self._dispatch_key(EventType.KEY_DOWN, key_event)

    def key_up(self, key_event: KeyEvent | Key) -> Event:
        return self._dispatch_key(EventType.KEY_UP, key_event)

    def press(self, key_event: KeyEvent | Key) -> Event:
        """Key down followed by key up. Returns the key-down event."""
        down = self.key_down(key_event)
        self.key_up(key_event)
        return down

    def _dispatch_key(self, event_type: EventType, key_event: KeyEvent | Key) -> Event:
        if isinstance(key_event, Key):
            key_event = KeyEvent(key=key_event)
        target = self.active_element or self.body
        return target.dispatch(Event(event_type, target, key_event=key_event))

    def move_pointer(self, row: int, col: int) -> Element:
        """Update hover state, firing mouse-out then mouse-over on change."""
        target = self.element_at_viewport(row, col)
        previous = self._hovered
        if target is previous:
            return target
        self._hovered = target
        if previous is not None and previous.document is self:
            previous.dispatch(Event(EventType.MOUSE_OUT, previous))
        target.dispatch(Event(EventType.MOUSE_OVER, target))
        return target
