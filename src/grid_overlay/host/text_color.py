"""Text color picker: wires a swatch overlay to a toolbar button and editables.

The picker listens to host notifications to decide which overlay belongs
to the active editable, keeps the overlay under its button when the
toolbar moves, and mirrors the color at the selection onto the button's
icon so reopening the picker focuses the matching swatch.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Iterable, Optional

from grid_overlay.config import PickerConfig
from grid_overlay.core.color import Color
from grid_overlay.core.constants import COLOR_PICKER_CLASS
from grid_overlay.core.document import Document
from grid_overlay.core.element import Display, Element
from grid_overlay.core.events import Event, EventType
from grid_overlay.host.bus import Message, MessageBus, Topic
from grid_overlay.host.editable import Editable, TextRange
from grid_overlay.host.registry import OverlayRegistry
from grid_overlay.host.scheduler import Scheduler
from grid_overlay.palette.swatches import Swatch, SwatchIndex, find_swatch, generate_swatches
from grid_overlay.widgets.overlay import Overlay, SelectionCallback
from grid_overlay.widgets.positioning import below

logger = logging.getLogger(__name__)


def set_color(editable: Editable, text_range: TextRange, color: Color) -> None:
    editable.text.set_color(text_range, color)


def unset_color(editable: Editable, text_range: TextRange) -> None:
    editable.text.unset_color(text_range)


class TextColorPicker:
    """
    Color picker for text in editables.

    Args:
        document: Document holding the button and the overlays
        bus: Host notifications (activation, toolbar moves, selection changes)
        scheduler: Runs the deferred icon refresh and overlay preparation
        registry: Where overlays are cached per editable
        config: Palettes and timing
        button: Toolbar button that opens the picker
    """

    def __init__(
        self,
        document: Document,
        bus: MessageBus,
        scheduler: Scheduler,
        registry: OverlayRegistry,
        config: PickerConfig,
        button: Element,
    ) -> None:
        self.document = document
        self.bus = bus
        self.scheduler = scheduler
        self.registry = registry
        self.config = config
        self.button = button
        self.index = SwatchIndex(config.colors)

        self.editable: Optional[Editable] = None
        self.overlay: Optional[Overlay] = None
        self.icon_color: Optional[Color] = None
        self._range_at_open: Optional[TextRange] = None

        self._unsubscribers: list[Callable[[], None]] = [
            bus.subscribe(Topic.EDITABLE_ACTIVATED, self._on_editable_activated),
            bus.subscribe(Topic.EDITABLE_DESTROYED, self._on_editable_destroyed),
            bus.subscribe(Topic.FLOATING_CHANGED, self._on_floating_changed),
            bus.subscribe(Topic.SELECTION_CONTEXT_CHANGE, self._on_selection_changed),
            bus.subscribe(Topic.STYLE_APPLIED, self._on_style_applied),
        ]
        button.add_listener(EventType.CLICK, self._on_button_click)
        self._set_button_visible(False)

    @property
    def button_visible(self) -> bool:
        return self.button.style.display is not Display.NONE

    def detach(self) -> None:
        """Stop listening to the bus and the button."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.button.remove_listener(EventType.CLICK, self._on_button_click)

    # -------------------------------------------------------------------------
    # Overlays
    # -------------------------------------------------------------------------

    def overlay_for(self, editable: Editable) -> Optional[Overlay]:
        """The editable's overlay, built on first use; None without colors."""
        colors = self.config.colors_for(editable.id)
        if not colors:
            return None

        def build() -> Overlay:
            overlay = Overlay(
                generate_swatches(colors, self.index),
                SelectionCallback(partial(self._on_select, editable)),
                self.button,
                self.document,
                columns=self.config.columns,
                class_name=COLOR_PICKER_CLASS,
            )
            overlay.container.style.position = self.config.position_mode
            return overlay

        return self.registry.get_or_create(editable.id, build)

    def prepare(self, editables: Iterable[Editable]) -> None:
        """Build overlays ahead of time, one per interval, last editable first."""
        pending = list(editables)

        def step() -> None:
            if not pending:
                return
            self.overlay_for(pending.pop())
            if pending:
                self.scheduler.call_later(self.config.prepare_interval, step)

        step()

    def open(self) -> bool:
        """Show the overlay under the button. Returns False if there is none."""
        if self.overlay is None or self.editable is None:
            return False

        if self.icon_color is not None:
            position = find_swatch(self.overlay.items, self.index.lookup(self.icon_color.css))
            if position is not None:
                self.overlay.focus(position)

        self._range_at_open = self.editable.selection
        self.overlay.show(self.button, below(self.button, self.config.position_mode))
        logger.debug("Opened picker for %r at %s", self.editable.id, self.overlay.container.page_offset())
        return True

    def _set_button_visible(self, visible: bool) -> None:
        self.button.style.display = Display.INLINE if visible else Display.NONE

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def _on_select(self, editable: Editable, swatch: Swatch) -> None:
        text_range = self._range_at_open
        if text_range is None:
            logger.debug("Swatch %r picked with no selection in %r", swatch.value, editable.id)
            return

        if swatch.clear:
            unset_color(editable, text_range)
        elif swatch.color is not None:
            set_color(editable, text_range, swatch.color)
        else:
            logger.warning("Swatch %r has no color to apply", swatch.value)
            return

        editable.select(text_range)
        self.bus.publish(Topic.SELECTION_CONTEXT_CHANGE, editable=editable, range=text_range)

    # -------------------------------------------------------------------------
    # Host notifications
    # -------------------------------------------------------------------------

    def _on_button_click(self, event: Event) -> None:
        self.open()

    def _on_editable_activated(self, message: Message) -> None:
        editable: Editable = message["editable"]
        overlay = self.overlay_for(editable)
        # The previous context's overlay would keep claiming grid keys
        if self.overlay is not None and self.overlay is not overlay:
            self.overlay.hide()
        self.editable = editable
        self.overlay = overlay
        self._set_button_visible(overlay is not None)

    def _on_editable_destroyed(self, message: Message) -> None:
        editable: Editable = message["editable"]
        self.registry.dispose(editable.id)
        if self.editable is editable:
            self.editable = None
            self.overlay = None
            self._set_button_visible(False)

    def _on_floating_changed(self, message: Message) -> None:
        offset = message.get("offset")
        if offset is not None:
            self.button.move_to(offset)
        if self.overlay is not None:
            self.overlay.container.move_to(below(self.button, self.config.position_mode))

    def _on_selection_changed(self, message: Message) -> None:
        editable = message.get("editable", self.editable)
        text_range = message.get("range")
        if editable is None or text_range is None:
            return
        # The color is applied after the change fires; read it back later
        self.scheduler.call_later(
            self.config.settle_delay,
            partial(self._refresh_icon, editable, text_range),
        )

    def _on_style_applied(self, message: Message) -> None:
        editable = message.get("editable", self.editable)
        text_range = message.get("range")
        if editable is not None and text_range is not None:
            self._refresh_icon(editable, text_range)

    def _refresh_icon(self, editable: Editable, text_range: TextRange) -> None:
        self.icon_color = editable.text.computed_color(max(text_range.start, text_range.end - 1))
        self.button.style.background = self.icon_color
