"""Interactive text color picker studio."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from grid_overlay.cli.core.input import InputReader
from grid_overlay.cli.core.terminal import Terminal
from grid_overlay.cli.widgets.status_bar import Shortcut, StatusBarWidget
from grid_overlay.config import PickerConfig
from grid_overlay.core.ansi_text import splice, styled, truncate_and_pad
from grid_overlay.core.document import Document
from grid_overlay.core.element import Element
from grid_overlay.core.events import Event, EventType
from grid_overlay.core.keys import Key, MouseEvent
from grid_overlay.host.bus import MessageBus, Topic
from grid_overlay.host.editable import Editable, TextRange
from grid_overlay.host.registry import OverlayRegistry
from grid_overlay.host.scheduler import Scheduler
from grid_overlay.host.text_color import TextColorPicker
from grid_overlay.widgets.base import Rect

logger = logging.getLogger(__name__)

SAMPLE_TEXT = {
    "title": "The quick brown fox",
    "body": "jumps over the lazy dog while the overlay floats above.",
    "footer": "Select text, then press c or click the A button.",
}

TEXT_LEFT = 10
BUTTON_LEFT = 14


class PickerApp:
    """
    Terminal front end for the text color picker.

    Layout:
    - Row 0: toolbar with the color button (its background is the color at
      the selection)
    - Rows 2, 4, ...: one editable per line
    - Last row: status bar

    Keys: ←/→ move the caret, Shift+←/→ select, Tab switches editable,
    c opens the picker, q quits. The mouse clicks and hovers.
    """

    def __init__(self, config: PickerConfig, texts: Optional[dict[str, str]] = None) -> None:
        self.config = config
        self.running = False
        self.input = InputReader()

        size = Terminal.size()
        self.document = Document(size.cols, size.rows - 1)
        self.bus = MessageBus()
        self.scheduler = Scheduler()
        self.registry = OverlayRegistry()

        self.button = self.document.body.append(
            Element("button", text="A", top=0, left=BUTTON_LEFT, width=3, height=1)
        )
        self.editables: list[Editable] = []
        for row, (editable_id, text) in enumerate((texts or SAMPLE_TEXT).items()):
            editable = Editable(editable_id, text)
            editable.element.top = 2 + row * 2
            editable.element.left = TEXT_LEFT
            editable.element.add_listener(EventType.CLICK, self._editable_click_handler(editable))
            self.document.body.append(editable.element)
            self.editables.append(editable)

        self.picker = TextColorPicker(
            self.document, self.bus, self.scheduler, self.registry, config, self.button
        )
        self.status_bar = StatusBarWidget()
        self.active: Optional[Editable] = None
        self._last_mouse: Optional[MouseEvent] = None

        self.document.add_listener(EventType.KEY_DOWN, self._on_key_down)

    def run(self) -> None:
        """Main application loop."""
        self.running = True
        self.picker.prepare(self.editables)
        if self.editables:
            self._activate(self.editables[0])

        with Terminal.managed_mode():
            while self.running:
                self.scheduler.run_due()
                self._render()
                self._handle_input()
        self.registry.dispose_all()

    # -------------------------------------------------------------------------
    # Editables
    # -------------------------------------------------------------------------

    def _activate(self, editable: Editable) -> None:
        if self.active is editable:
            return
        self.active = editable
        self.document.active_element = editable.element
        self.bus.publish(Topic.EDITABLE_ACTIVATED, editable=editable)
        logger.debug("Activated %r", editable.id)

    def _editable_click_handler(self, editable: Editable):
        def on_click(event: Event) -> None:
            self._activate(editable)
            if self._last_mouse is None or event.target is not editable.element:
                return
            column = self._last_mouse.x + self.document.scroll_left - editable.element.left
            caret = max(0, min(len(editable.text), column))
            editable.select(TextRange(caret, caret))
            self._selection_changed(editable)
        return on_click

    def _selection_changed(self, editable: Editable) -> None:
        if editable.selection is not None:
            self.bus.publish(Topic.SELECTION_CONTEXT_CHANGE, editable=editable, range=editable.selection)

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def _handle_input(self) -> None:
        event = self.input.read(timeout=0.05)
        if event is None:
            return

        if isinstance(event, MouseEvent):
            self._last_mouse = event
            if event.motion:
                self.document.move_pointer(event.y, event.x)
            elif event.is_click:
                self.document.click_at(event.y, event.x)
            return

        self.document.press(event)

    def _on_key_down(self, event: Event) -> None:
        key_event = event.key_event
        if key_event is None:
            return

        if key_event.char == 'q':
            self.running = False
        elif key_event.char == 'c':
            self.document.click(self.button)
        elif key_event.key == Key.TAB and self.editables:
            current = self.editables.index(self.active) if self.active in self.editables else -1
            self._activate(self.editables[(current + 1) % len(self.editables)])
        elif key_event.key in (Key.LEFT, Key.RIGHT) and self.active is not None:
            delta = -1 if key_event.key == Key.LEFT else 1
            self.active.move_caret(delta, extend=key_event.shift)
            self._selection_changed(self.active)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _render(self) -> None:
        size = Terminal.size()
        self.document.resize(size.cols, size.rows - 1)
        lines = [""] * (size.rows - 1)

        lines[0] = styled(" Text color", "1")
        if self.picker.button_visible:
            icon = self.picker.icon_color
            params = ["1"]
            if icon is not None:
                params += ["30" if not icon.is_dark() else "97", icon.to_sgr_bg()]
            lines[0] = splice(lines[0], styled(" A ", *params), self.button.left)

        for editable in self.editables:
            row = editable.element.top
            if row >= len(lines):
                continue
            is_active = editable is self.active
            label = styled(f" {editable.id:<8}", "1" if is_active else "90")
            text = editable.text.render(editable.selection, editable.caret if is_active else None)
            lines[row] = splice(label, text, editable.element.left)

        for context_id in self.registry:
            overlay = self.registry.get(context_id)
            if overlay is None or not overlay.is_visible:
                continue
            origin = overlay.container.page_offset().translate(-self.document.scroll_top, -self.document.scroll_left)
            top, left = origin.top, origin.left
            panel = overlay.render(Rect.clipped(origin, size.cols, len(lines)))
            for i, panel_line in enumerate(panel):
                if 0 <= top + i < len(lines):
                    lines[top + i] = splice(lines[top + i], panel_line, left)

        self.status_bar.set_left(self._status_text())
        self.status_bar.set_shortcuts([
            Shortcut("⇧←→", "Select"),
            Shortcut("Tab", "Next"),
            Shortcut("c", "Color"),
            Shortcut("q", "Quit"),
        ])
        lines.extend(self.status_bar.render(Rect(0, 0, size.cols, 1)))

        Terminal.home()
        sys.stdout.write('\r\n'.join(truncate_and_pad(line, size.cols) + "\x1b[K" for line in lines))
        sys.stdout.flush()

    def _status_text(self) -> str:
        if self.active is None:
            return "No editable"
        overlay = self.picker.overlay
        if overlay is not None and overlay.is_visible:
            swatch = overlay.focused_item
            return f"{self.active.id}: {swatch.value or 'remove color'}" if swatch else self.active.id
        if self.picker.icon_color is not None:
            return f"{self.active.id}: {self.picker.icon_color.hex}"
        return self.active.id


def run_picker(config: PickerConfig) -> None:
    """Launch the picker studio."""
    app = PickerApp(config)
    app.run()
