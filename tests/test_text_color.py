"""Tests for the text color picker wired to a host."""

import pytest

from grid_overlay.config import PickerConfig
from grid_overlay.core.color import Color
from grid_overlay.core.constants import COLOR_PICKER_CLASS
from grid_overlay.core.element import Display, Offset, PositionMode
from grid_overlay.core.keys import Key
from grid_overlay.host.bus import MessageBus, Topic
from grid_overlay.host.editable import Editable, TextRange
from grid_overlay.host.registry import OverlayRegistry
from grid_overlay.host.scheduler import Scheduler
from grid_overlay.host.text_color import TextColorPicker

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)


@pytest.fixture
def config() -> PickerConfig:
    return PickerConfig(
        colors=["#FF0000", "#00FF00", "#0000FF"],
        editables={"footer": []},
    )


@pytest.fixture
def bus() -> MessageBus:
    return MessageBus()


@pytest.fixture
def scheduler(clock) -> Scheduler:
    return Scheduler(clock)


@pytest.fixture
def registry() -> OverlayRegistry:
    return OverlayRegistry()


@pytest.fixture
def picker(document, bus, scheduler, registry, config, anchor) -> TextColorPicker:
    return TextColorPicker(document, bus, scheduler, registry, config, anchor)


@pytest.fixture
def title(bus, picker) -> Editable:
    editable = Editable("title", "hello world")
    bus.publish(Topic.EDITABLE_ACTIVATED, editable=editable)
    return editable


def settle(clock, scheduler, seconds: float = 0.02) -> None:
    clock.advance(seconds)
    scheduler.run_due()


class TestActivation:
    """Which overlay belongs to the active editable."""

    def test_button_hidden_until_activation(self, picker: TextColorPicker) -> None:
        assert picker.button_visible is False
        assert picker.button.style.display is Display.NONE

    def test_activation_builds_overlay(self, picker: TextColorPicker, title: Editable, registry) -> None:
        assert picker.button_visible is True
        assert "title" in registry
        assert picker.overlay is registry.get("title")
        assert picker.overlay.container.has_class(COLOR_PICKER_CLASS)
        assert picker.overlay.container.style.position is PositionMode.FIXED

    def test_overlay_has_clear_swatch(self, picker: TextColorPicker, title: Editable) -> None:
        items = picker.overlay.items
        assert [s.color for s in items[:3]] == [RED, GREEN, BLUE]
        assert items[-1].clear

    def test_empty_palette_hides_button(self, picker: TextColorPicker, title: Editable, bus) -> None:
        bus.publish(Topic.EDITABLE_ACTIVATED, editable=Editable("footer", "x"))
        assert picker.button_visible is False
        assert picker.overlay is None

    def test_overlay_reused(self, picker: TextColorPicker, title: Editable, bus) -> None:
        first = picker.overlay
        bus.publish(Topic.EDITABLE_ACTIVATED, editable=Editable("body", "x"))
        bus.publish(Topic.EDITABLE_ACTIVATED, editable=title)
        assert picker.overlay is first

    def test_switching_editable_hides_open_overlay(
        self, picker: TextColorPicker, title: Editable, bus, document, registry
    ) -> None:
        title.select(TextRange(0, 5))
        picker.open()
        body = Editable("body", "second line")
        bus.publish(Topic.EDITABLE_ACTIVATED, editable=body)
        assert registry.get("title").is_visible is False

        body.select(TextRange(0, 3))
        picker.open()
        assert [cid for cid in registry if registry.get(cid).is_visible] == ["body"]
        document.press(Key.RIGHT)
        document.press(Key.ENTER)
        assert body.text.color_at(0) == GREEN
        assert title.text.color_at(0) is None

    def test_destroyed_disposes(self, picker: TextColorPicker, title: Editable, bus, registry) -> None:
        container = picker.overlay.container
        bus.publish(Topic.EDITABLE_DESTROYED, editable=title)
        assert "title" not in registry
        assert container.parent is None
        assert picker.overlay is None
        assert picker.button_visible is False


class TestOpen:
    """Showing the picker under its button."""

    def test_button_click_opens(self, picker: TextColorPicker, title: Editable, document, anchor) -> None:
        document.click(anchor)
        assert picker.overlay.is_visible
        assert picker.overlay.container.page_offset() == Offset(1, 10)

    def test_open_without_editable(self, picker: TextColorPicker) -> None:
        assert picker.open() is False

    def test_prefocus_matches_icon(self, picker: TextColorPicker, title: Editable, bus) -> None:
        title.text.set_color(TextRange(0, 5), BLUE)
        bus.publish(Topic.STYLE_APPLIED, editable=title, range=TextRange(0, 5))
        picker.open()
        assert picker.overlay.focused_index == 2

    def test_unknown_icon_color_keeps_focus(self, picker: TextColorPicker, title: Editable, bus) -> None:
        bus.publish(Topic.STYLE_APPLIED, editable=title, range=TextRange(0, 1))
        assert picker.icon_color == Color.DEFAULT_FG
        picker.open()
        assert picker.overlay.focused_index == 0

    def test_follows_floating_toolbar(self, picker: TextColorPicker, title: Editable, bus, anchor) -> None:
        picker.open()
        bus.publish(Topic.FLOATING_CHANGED, offset=Offset(3, 20))
        assert (anchor.top, anchor.left) == (3, 20)
        assert picker.overlay.container.page_offset() == Offset(4, 20)


class TestApply:
    """Applying the picked swatch to the selection."""

    def test_applies_to_range_at_open(self, picker: TextColorPicker, title: Editable, document) -> None:
        title.select(TextRange(0, 5))
        picker.open()
        title.select(TextRange(6, 8))
        picker.overlay.focus(1)
        document.press(Key.ENTER)
        assert [title.text.color_at(i) for i in range(5)] == [GREEN] * 5
        assert title.text.color_at(6) is None
        assert title.selection == TextRange(0, 5)

    def test_click_applies(self, picker: TextColorPicker, title: Editable, document) -> None:
        title.select(TextRange(0, 2))
        picker.open()
        document.click(picker.overlay.cells[0])
        assert title.text.color_at(0) == RED
        assert picker.overlay.is_visible is False

    def test_clear_swatch_removes_color(self, picker: TextColorPicker, title: Editable, document) -> None:
        title.text.set_color(TextRange(0, 11), RED)
        title.select(TextRange(0, 5))
        picker.open()
        picker.overlay.focus(len(picker.overlay.items) - 1)
        document.press(Key.ENTER)
        assert title.text.color_at(0) is None
        assert title.text.color_at(5) == RED

    def test_no_selection_is_ignored(self, picker: TextColorPicker, title: Editable, document) -> None:
        picker.open()
        document.press(Key.ENTER)
        assert all(title.text.color_at(i) is None for i in range(len(title.text)))

    def test_selection_change_published(self, picker: TextColorPicker, title: Editable, document, bus) -> None:
        seen: list = []
        bus.subscribe(Topic.SELECTION_CONTEXT_CHANGE, seen.append)
        title.select(TextRange(1, 3))
        picker.open()
        document.press(Key.ENTER)
        assert len(seen) == 1
        assert seen[0]["editable"] is title
        assert seen[0]["range"] == TextRange(1, 3)


class TestIconRefresh:
    """The button mirrors the color at the selection."""

    def test_waits_for_settle_delay(self, picker, title, bus, clock, scheduler) -> None:
        title.text.set_color(TextRange(0, 3), RED)
        bus.publish(Topic.SELECTION_CONTEXT_CHANGE, editable=title, range=TextRange(0, 3))
        assert picker.icon_color is None
        settle(clock, scheduler, 0.01)
        assert picker.icon_color is None
        settle(clock, scheduler, 0.05)
        assert picker.icon_color == RED
        assert picker.button.style.background == RED

    def test_reads_last_selected_character(self, picker, title, bus, clock, scheduler) -> None:
        title.text.set_color(TextRange(2, 3), BLUE)
        bus.publish(Topic.SELECTION_CONTEXT_CHANGE, editable=title, range=TextRange(0, 3))
        settle(clock, scheduler)
        assert picker.icon_color == BLUE

    def test_collapsed_range_reads_caret(self, picker, title, bus, clock, scheduler) -> None:
        title.text.set_color(TextRange(4, 5), GREEN)
        bus.publish(Topic.SELECTION_CONTEXT_CHANGE, editable=title, range=TextRange(4, 4))
        settle(clock, scheduler)
        assert picker.icon_color == GREEN

    def test_style_applied_is_immediate(self, picker, title, bus) -> None:
        title.text.set_color(TextRange(0, 1), GREEN)
        bus.publish(Topic.STYLE_APPLIED, editable=title, range=TextRange(0, 1))
        assert picker.icon_color == GREEN

    def test_after_apply(self, picker, title, document, clock, scheduler) -> None:
        title.select(TextRange(0, 4))
        picker.open()
        picker.overlay.focus(2)
        document.press(Key.ENTER)
        settle(clock, scheduler)
        assert picker.icon_color == BLUE
        picker.open()
        assert picker.overlay.focused_index == 2

    def test_ignores_message_without_range(self, picker, title, bus, scheduler) -> None:
        bus.publish(Topic.SELECTION_CONTEXT_CHANGE, editable=title)
        assert scheduler.pending == 0


class TestPrepare:
    """Building overlays ahead of use."""

    def test_staggered_last_first(self, picker, registry, clock, scheduler) -> None:
        editables = [Editable(name, "x") for name in ("a", "b", "c")]
        picker.prepare(editables)
        assert list(registry) == ["c"]
        settle(clock, scheduler, 0.1)
        assert list(registry) == ["c", "b"]
        settle(clock, scheduler, 0.1)
        assert list(registry) == ["c", "b", "a"]
        assert scheduler.pending == 0

    def test_skips_empty_palettes(self, picker, registry, clock, scheduler) -> None:
        picker.prepare([Editable("footer", "x")])
        assert len(registry) == 0

    def test_prepare_nothing(self, picker, registry) -> None:
        picker.prepare([])
        assert len(registry) == 0


class TestDetach:
    """Unwiring the picker."""

    def test_detach(self, picker, bus, document, anchor) -> None:
        picker.detach()
        for topic in (Topic.EDITABLE_ACTIVATED, Topic.STYLE_APPLIED):
            assert bus.subscriber_count(topic) == 0
        bus.publish(Topic.EDITABLE_ACTIVATED, editable=Editable("title", "x"))
        assert picker.editable is None
