"""Floating grid of selectable cells driven by mouse and keyboard.

The overlay is built once per context and reused: hidden between uses,
never rebuilt. Its state is explicit (`visibility`, `focused_index`,
`active`) and the container and cell elements are a projection of it:
the container's display is ``TABLE`` while visible, and the focused cell
carries the ``focused`` class.

Interaction channels, each wired once at construction:

- a click listener on the body hides the overlay on clicks outside it
- a document key-up listener hides it on Escape
- a document key-down listener at ``Priority.OVERLAY`` moves focus with the
  arrow keys and selects with Enter; while visible it claims those keys
  before any other listener sees them
"""

from __future__ import annotations

from enum import Enum
from functools import partial
from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable

from grid_overlay.core.ansi_text import styled, truncate, truncate_and_pad
from grid_overlay.core.constants import BORDER, CELL_WIDTH, COLUMNS_PER_ROW, FOCUSED_CLASS, OVERLAY_CLASS
from grid_overlay.core.document import Document
from grid_overlay.core.element import Display, Element, Offset, PositionMode, Style
from grid_overlay.core.events import Event, EventTarget, EventType, Handler, Priority
from grid_overlay.core.keys import Key, KeyEvent
from grid_overlay.widgets.base import BaseWidget, Rect


NAVIGATION_KEYS = frozenset({Key.ENTER, Key.LEFT, Key.UP, Key.RIGHT, Key.DOWN})


class Visibility(Enum):
    """Whether the overlay is on screen."""
    HIDDEN = "hidden"
    VISIBLE = "visible"


@runtime_checkable
class SelectionListener(Protocol):
    """Receives the payload of the cell the user picked."""

    def on_selected(self, payload: Any) -> None:
        ...


class SelectionCallback:
    """Adapts a plain function to SelectionListener."""

    def __init__(self, callback: Callable[[Any], None]) -> None:
        self._callback = callback

    def on_selected(self, payload: Any) -> None:
        self._callback(payload)


class Overlay(BaseWidget):
    """
    A floating panel holding a grid of cells.

    Args:
        items: Cell payloads in display order, packed `columns` to a row
        listener: Notified with a payload when the user selects a cell
        anchor: Trigger control; clicks on it or inside it never dismiss
        document: Document whose body receives the container
        columns: Cells per row
        render_item: Turns a payload into the cell's label markup
    """

    def __init__(
        self,
        items: Sequence[Any],
        listener: SelectionListener,
        anchor: Optional[Element],
        document: Document,
        *,
        columns: int = COLUMNS_PER_ROW,
        render_item: Callable[[Any], str] = str,
        class_name: str = OVERLAY_CLASS,
    ) -> None:
        if columns < 1:
            raise ValueError(f"columns must be positive, got {columns}")
        super().__init__()
        self._items: tuple[Any, ...] = tuple(items)
        self._listener = listener
        self.anchor = anchor
        self.document = document
        self.columns = columns
        self._render_item = render_item

        self.active = False
        self._visibility = Visibility.HIDDEN
        self._focused_index: Optional[int] = None
        self._hover_focus = False  # Focus came from the pointer and is ephemeral

        self._cells: list[Element] = []
        self._bindings: list[tuple[EventTarget, EventType, Handler]] = []

        self.container = Element(
            "table",
            classes=(class_name,),
            role="dialog",
            style=Style(display=Display.NONE, position=PositionMode.ABSOLUTE),
        )
        document.body.append(self.container)

        self._hide_on_body_click()
        self._hide_on_escape()
        self._bind_movements()
        self.populate()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def items(self) -> tuple[Any, ...]:
        return self._items

    @property
    def cells(self) -> tuple[Element, ...]:
        return tuple(self._cells)

    @property
    def rows(self) -> list[list[Any]]:
        """Payloads packed row-major; the last row may be partial."""
        return [
            list(self._items[start:start + self.columns])
            for start in range(0, len(self._items), self.columns)
        ]

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    @property
    def is_visible(self) -> bool:
        return self._visibility is Visibility.VISIBLE

    @property
    def visible(self) -> bool:
        return self.is_visible

    @property
    def focused_index(self) -> Optional[int]:
        return self._focused_index

    @property
    def focused_item(self) -> Any:
        if self._focused_index is None:
            return None
        return self._items[self._focused_index]

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def show(self, anchor: Optional[Element] = None, offset: Optional[Offset] = None) -> None:
        """
        Show the overlay at offset.

        Hover focus left over from the last use is dropped; if no cell is
        focused afterwards the first cell is, so the keyboard always has a
        starting point.
        """
        if anchor is not None:
            self.anchor = anchor
        if offset is not None:
            self.container.move_to(offset)
        self._visibility = Visibility.VISIBLE
        if self._hover_focus:
            self._focused_index = None
            self._hover_focus = False
        if self._focused_index is None and self._cells:
            self._focused_index = 0
        self.active = True
        self._project()

    def hide(self) -> None:
        """Hide the overlay. Safe to call when already hidden."""
        self._visibility = Visibility.HIDDEN
        self.active = False
        self._project()

    def dispose(self) -> None:
        """Unregister every listener and detach the container."""
        self.hide()
        for target, event_type, handler in self._bindings:
            target.remove_listener(event_type, handler)
        self._bindings.clear()
        self.container.remove()

    def populate(self) -> None:
        """Build one cell element per item, `columns` to a row."""
        self.container.clear_children()
        self._cells = []
        for index, item in enumerate(self._items):
            row, col = divmod(index, self.columns)
            cell = Element(
                "td",
                text=self._render_item(item),
                top=BORDER + row,
                left=BORDER + col * CELL_WIDTH,
                width=CELL_WIDTH,
                height=1,
            )
            cell.add_listener(EventType.MOUSE_OVER, partial(self._on_cell_over, index))
            cell.add_listener(EventType.MOUSE_OUT, partial(self._on_cell_out, index))
            cell.add_listener(EventType.CLICK, partial(self._on_cell_click, index))
            self.container.append(cell)
            self._cells.append(cell)

        row_count = -(-len(self._items) // self.columns)
        self.container.width = 2 * BORDER + min(len(self._items), self.columns) * CELL_WIDTH
        self.container.height = 2 * BORDER + row_count
        self._focused_index = None
        self._hover_focus = False
        self._project()

    # -------------------------------------------------------------------------
    # Focus
    # -------------------------------------------------------------------------

    def focus(self, index: int) -> bool:
        """Focus the cell at index. Returns False if there is no such cell."""
        if not 0 <= index < len(self._cells):
            return False
        self._set_focus(index)
        return True

    def clear_focus(self) -> None:
        self._focused_index = None
        self._hover_focus = False
        self._project()

    def _set_focus(self, index: int, hover: bool = False) -> None:
        self._focused_index = index
        self._hover_focus = hover
        self._project()

    def _index_at(self, row: int, col: int) -> Optional[int]:
        if row < 0 or not 0 <= col < self.columns:
            return None
        index = row * self.columns + col
        return index if index < len(self._items) else None

    def _move(self, d_row: int, d_col: int) -> None:
        """Move focus by a grid step; stays put when no cell is there."""
        if self._focused_index is None:
            return
        row, col = divmod(self._focused_index, self.columns)
        target = self._index_at(row + d_row, col + d_col)
        if target is not None:
            self._set_focus(target)

    def _select(self, index: int) -> None:
        payload = self._items[index]
        self.hide()
        self._listener.on_selected(payload)

    # -------------------------------------------------------------------------
    # Input Handling
    # -------------------------------------------------------------------------

    def handle_input(self, event: KeyEvent) -> bool:
        """Grid navigation. Returns True for navigation keys while visible."""
        if not self.is_visible or event.key not in NAVIGATION_KEYS:
            return False

        if event.key == Key.ENTER:
            if self._focused_index is not None:
                self._select(self._focused_index)
        elif event.key == Key.LEFT:
            self._move(0, -1)
        elif event.key == Key.RIGHT:
            self._move(0, 1)
        elif event.key == Key.UP:
            self._move(-1, 0)
        elif event.key == Key.DOWN:
            self._move(1, 0)
        return True

    def _bind(
        self,
        target: EventTarget,
        event_type: EventType,
        handler: Handler,
        priority: int = Priority.NORMAL,
    ) -> None:
        target.add_listener(event_type, handler, priority)
        self._bindings.append((target, event_type, handler))

    def _hide_on_body_click(self) -> None:
        self._bind(self.container, EventType.CLICK, self._on_container_click)
        self._bind(self.document.body, EventType.CLICK, self._on_body_click)

    def _hide_on_escape(self) -> None:
        self._bind(self.document, EventType.KEY_UP, self._on_key_up)

    def _bind_movements(self) -> None:
        self._bind(self.document, EventType.KEY_DOWN, self._on_key_down, Priority.OVERLAY)

    def _on_container_click(self, event: Event) -> None:
        # Clicks inside the grid never reach the body listener
        event.stop_propagation()

    def _on_body_click(self, event: Event) -> None:
        if not self.active:
            return
        target = event.target
        if target is self.container:
            return
        if self.anchor is not None and isinstance(target, Element) and self.anchor.contains(target):
            return
        self.hide()

    def _on_key_up(self, event: Event) -> None:
        if event.key == Key.ESCAPE and self.is_visible:
            self.hide()

    def _on_key_down(self, event: Event) -> None:
        if event.key_event is None or not self.is_visible or event.key not in NAVIGATION_KEYS:
            return
        # Lower-priority listeners on the document must not see grid keys
        event.stop_immediate_propagation()
        event.prevent_default()
        self.handle_input(event.key_event)

    def _on_cell_over(self, index: int, event: Event) -> None:
        self._set_focus(index, hover=True)

    def _on_cell_out(self, index: int, event: Event) -> None:
        if self._focused_index == index and self._hover_focus:
            self.clear_focus()

    def _on_cell_click(self, index: int, event: Event) -> None:
        self._select(index)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _project(self) -> None:
        """Mirror state onto the container and cell elements."""
        self.container.style.display = Display.TABLE if self.is_visible else Display.NONE
        for index, cell in enumerate(self._cells):
            cell.toggle_class(FOCUSED_CLASS, index == self._focused_index)

    def render(self, bounds: Rect) -> list[str]:
        """Render the boxed grid; the focused cell is bracketed."""
        if not self.is_visible:
            return []

        inner = self.container.width - 2 * BORDER
        lines = ["┌" + "─" * inner + "┐"]
        for start in range(0, len(self._cells), self.columns):
            parts: list[str] = []
            row_cells = self._cells[start:start + self.columns]
            for offset, cell in enumerate(row_cells):
                content = truncate_and_pad(cell.text, CELL_WIDTH - 2)
                if start + offset == self._focused_index:
                    parts.append(styled("[", "1") + content + styled("]", "1"))
                else:
                    parts.append(" " + content + " ")
            padding = " " * (inner - len(row_cells) * CELL_WIDTH)
            lines.append("│" + "".join(parts) + padding + "│")
        lines.append("└" + "─" * inner + "┘")

        return [truncate(line, bounds.width) for line in lines[:bounds.height]]
