"""Tests for decoding terminal input (no terminal needed)."""

import pytest

from grid_overlay.cli.core.input import InputReader
from grid_overlay.core.keys import Key, KeyEvent, MouseEvent


@pytest.fixture
def reader() -> InputReader:
    return InputReader(fd=-1)


def decode(reader: InputReader, data: str) -> list:
    reader.feed(data)
    events = []
    while True:
        event = reader.next_event()
        if event is None:
            break
        events.append(event)
    return events


class TestKeys:
    """Keyboard sequences."""

    def test_arrows(self, reader: InputReader) -> None:
        events = decode(reader, "\x1b[A\x1b[B\x1b[C\x1b[D")
        assert [e.key for e in events] == [Key.UP, Key.DOWN, Key.RIGHT, Key.LEFT]
        assert not any(e.shift for e in events)

    def test_application_mode_arrows(self, reader: InputReader) -> None:
        assert decode(reader, "\x1bOC")[0].key is Key.RIGHT

    def test_shifted_arrows(self, reader: InputReader) -> None:
        events = decode(reader, "\x1b[1;2C\x1b[1;2D")
        assert [(e.key, e.shift) for e in events] == [(Key.RIGHT, True), (Key.LEFT, True)]

    def test_simple_keys(self, reader: InputReader) -> None:
        events = decode(reader, "\r\t\x7f")
        assert [e.key for e in events] == [Key.ENTER, Key.TAB, Key.BACKSPACE]

    def test_characters(self, reader: InputReader) -> None:
        events = decode(reader, "qc")
        assert events == [KeyEvent.of_char("q"), KeyEvent.of_char("c")]
        assert events[0].is_char

    def test_lone_escape(self, reader: InputReader) -> None:
        assert decode(reader, "\x1b") == [KeyEvent(key=Key.ESCAPE, raw="\x1b")]

    def test_escape_then_sequence(self, reader: InputReader) -> None:
        events = decode(reader, "\x1b\x1b[A")
        assert [e.key for e in events] == [Key.ESCAPE, Key.UP]

    def test_navigation_keys(self, reader: InputReader) -> None:
        events = decode(reader, "\x1b[5~\x1b[3~\x1b[H")
        assert [e.key for e in events] == [Key.PAGE_UP, Key.DELETE, Key.HOME]

    def test_unknown_sequence(self, reader: InputReader) -> None:
        event = decode(reader, "\x1b[99Z")[0]
        assert event.key is None
        assert event.raw == "\x1b[99Z"


class TestMouse:
    """SGR mouse reports."""

    def test_press(self, reader: InputReader) -> None:
        event = decode(reader, "\x1b[<0;11;3M")[0]
        assert event == MouseEvent(x=10, y=2, button=0, pressed=True, motion=False, raw="\x1b[<0;11;3M")
        assert event.is_click

    def test_release(self, reader: InputReader) -> None:
        event = decode(reader, "\x1b[<0;1;1m")[0]
        assert event.pressed is False
        assert not event.is_click

    def test_motion(self, reader: InputReader) -> None:
        event = decode(reader, "\x1b[<35;20;5M")[0]
        assert event.motion is True
        assert (event.x, event.y) == (19, 4)
        assert not event.is_click

    def test_right_button(self, reader: InputReader) -> None:
        event = decode(reader, "\x1b[<2;5;5M")[0]
        assert event.button == 2
        assert not event.is_click

    def test_mixed_stream(self, reader: InputReader) -> None:
        events = decode(reader, "\x1b[<35;2;2Mq\x1b[A")
        assert isinstance(events[0], MouseEvent)
        assert events[1] == KeyEvent.of_char("q")
        assert events[2].key is Key.UP


class TestRead:
    """Buffered reads skip the terminal."""

    def test_read_uses_buffer(self, reader: InputReader) -> None:
        reader.feed("x")
        assert reader.read(timeout=0) == KeyEvent.of_char("x")

    def test_read_without_input(self, reader: InputReader) -> None:
        assert reader.read(timeout=0) is None
