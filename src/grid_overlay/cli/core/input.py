"""Keyboard and mouse input handling with event abstraction."""

from __future__ import annotations

import os
import re
import select
import sys
import time
from typing import Optional, Union

from grid_overlay.core.keys import Key, KeyEvent, MouseEvent

InputEvent = Union[KeyEvent, MouseEvent]

# SGR mouse report body (after ESC): [<button;col;row then M (press) or m (release)
_SGR_MOUSE = re.compile(r'\[<(\d+);(\d+);(\d+)([Mm])')


class InputReader:
    """
    Non-blocking keyboard and mouse reader.

    Uses os.read() to bypass Python's I/O buffering and properly
    handle escape sequences that may arrive split across reads.
    """

    # Escape sequence mappings (without the \x1b prefix)
    SEQUENCES: dict[str, Key] = {
        # Arrow keys (CSI)
        '[A': Key.UP,
        '[B': Key.DOWN,
        '[C': Key.RIGHT,
        '[D': Key.LEFT,
        # Arrow keys (SS3 - application mode)
        'OA': Key.UP,
        'OB': Key.DOWN,
        'OC': Key.RIGHT,
        'OD': Key.LEFT,
        # Navigation
        '[H': Key.HOME,
        '[F': Key.END,
        '[1~': Key.HOME,
        '[4~': Key.END,
        '[5~': Key.PAGE_UP,
        '[6~': Key.PAGE_DOWN,
        '[2~': Key.INSERT,
        '[3~': Key.DELETE,
        'OP': Key.F1,
    }

    # xterm modifier form: [1;<mod><letter>, where mod 2 is Shift
    SHIFTED: dict[str, Key] = {
        '[1;2A': Key.UP,
        '[1;2B': Key.DOWN,
        '[1;2C': Key.RIGHT,
        '[1;2D': Key.LEFT,
    }

    SIMPLE_KEYS: dict[str, Key] = {
        '\r': Key.ENTER,
        '\n': Key.ENTER,
        '\t': Key.TAB,
        '\x7f': Key.BACKSPACE,
        '\x08': Key.BACKSPACE,
    }

    def __init__(self, fd: Optional[int] = None) -> None:
        self._buffer = ""
        self._fd = fd

    @property
    def fd(self) -> int:
        if self._fd is None:
            self._fd = sys.stdin.fileno()
        return self._fd

    def feed(self, data: str) -> None:
        """Queue raw input as if it had been read from the terminal."""
        self._buffer += data

    def read(self, timeout: float = 0.1) -> Optional[InputEvent]:
        """
        Read a single input event.

        Returns None if no input available within timeout.
        """
        # Process any buffered input first
        if self._buffer:
            return self.next_event()

        if not self._has_input(timeout):
            return None

        self._read_available()
        return self.next_event()

    def next_event(self) -> Optional[InputEvent]:
        """Decode the next event from buffered input."""
        if not self._buffer:
            return None

        # Simple keys
        if self._buffer[0] in self.SIMPLE_KEYS:
            raw = self._buffer[0]
            self._buffer = self._buffer[1:]
            return KeyEvent(key=self.SIMPLE_KEYS[raw], raw=raw)

        # Escape sequence
        if self._buffer[0] == '\x1b':
            return self._parse_escape_sequence()

        # Printable character
        if self._buffer[0].isprintable():
            ch = self._buffer[0]
            self._buffer = self._buffer[1:]
            return KeyEvent(char=ch, raw=ch)

        # Unknown control character - skip it
        self._buffer = self._buffer[1:]
        return None

    def _read_available(self) -> None:
        """Read all currently available input into buffer using os.read."""
        try:
            data = os.read(self.fd, 1024)
        except BlockingIOError:
            return
        self._buffer += data.decode('utf-8', errors='replace')

        # If buffer is just escape, wait for potential sequence
        if self._buffer == '\x1b':
            self._wait_for_escape_sequence()

    def _wait_for_escape_sequence(self) -> None:
        """Wait briefly for the rest of an escape sequence."""
        deadline = time.monotonic() + 0.1  # 100ms total wait

        while time.monotonic() < deadline:
            wait_time = min(deadline - time.monotonic(), 0.025)
            if wait_time <= 0:
                break
            if not self._has_input(wait_time):
                continue
            try:
                data = os.read(self.fd, 1024)
            except BlockingIOError:
                continue
            self._buffer += data.decode('utf-8', errors='replace')

            rest = self._buffer[1:]
            if rest and (rest[-1].isalpha() or rest[-1] == '~'):
                return

    def _parse_escape_sequence(self) -> InputEvent:
        """Parse an escape sequence from the buffer."""
        rest = self._buffer[1:]

        # Find where this sequence ends
        end_idx = 0
        if rest.startswith('O') and len(rest) >= 2:
            end_idx = 2  # SS3: one final character
        else:
            for i, ch in enumerate(rest):
                if ch == '\x1b':
                    # Start of next escape sequence
                    end_idx = i
                    break
                if ch.isalpha() or ch == '~':
                    end_idx = i + 1
                    break
                end_idx = i + 1

        if end_idx == 0:
            # Just escape, no sequence
            self._buffer = self._buffer[1:]
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        seq = rest[:end_idx]
        raw = '\x1b' + seq
        self._buffer = self._buffer[1 + end_idx:]

        if seq in self.SEQUENCES:
            return KeyEvent(key=self.SEQUENCES[seq], raw=raw)
        if seq in self.SHIFTED:
            return KeyEvent(key=self.SHIFTED[seq], raw=raw, shift=True)

        mouse = _SGR_MOUSE.fullmatch(seq)
        if mouse:
            code = int(mouse.group(1))
            return MouseEvent(
                x=int(mouse.group(2)) - 1,
                y=int(mouse.group(3)) - 1,
                button=code & 0b11,
                pressed=mouse.group(4) == 'M',
                motion=bool(code & 32),
                raw=raw,
            )

        # Unknown sequence
        return KeyEvent(raw=raw)

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        try:
            ready, _, _ = select.select([self.fd], [], [], timeout)
        except (ValueError, OSError):
            return False
        return bool(ready)
