"""Terminal control for the picker studio: screen, cursor, raw input and mouse."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from grid_overlay.core.constants import CSI, RESET

# DEC private modes toggled with CSI ? <n> h / l
ALTERNATE_SCREEN = 1049
CURSOR_VISIBLE = 25
MOUSE_ANY_MOTION = 1003
MOUSE_SGR = 1006


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """Terminal I/O for the full-screen picker."""

    @staticmethod
    def size() -> TerminalSize:
        """Current dimensions, 24x80 when not attached to a terminal."""
        try:
            size = os.get_terminal_size()
            return TerminalSize(size.lines, size.columns)
        except OSError:
            return TerminalSize(24, 80)

    @staticmethod
    def write(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    @staticmethod
    def home() -> None:
        """Put the cursor at the top-left cell before a full redraw."""
        Terminal.write(f'{CSI}H')

    @staticmethod
    @contextmanager
    def private_mode(*modes: int, enable: bool = True) -> Iterator[None]:
        """Set DEC private modes for the duration of the block, then undo them."""
        codes = ';'.join(str(mode) for mode in modes)
        Terminal.write(f"{CSI}?{codes}{'h' if enable else 'l'}")
        try:
            yield
        finally:
            Terminal.write(f"{CSI}?{codes}{'l' if enable else 'h'}")

    @staticmethod
    @contextmanager
    def raw_mode() -> Iterator[None]:
        """Context manager for raw terminal mode (Unix only)."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows - input stays line-buffered
            yield
            return
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @staticmethod
    @contextmanager
    def managed_mode() -> Iterator[None]:
        """Alternate screen, hidden cursor, raw input and SGR mouse reports."""
        try:
            with Terminal.private_mode(ALTERNATE_SCREEN), \
                    Terminal.private_mode(CURSOR_VISIBLE, enable=False), \
                    Terminal.raw_mode(), \
                    Terminal.private_mode(MOUSE_ANY_MOTION, MOUSE_SGR):
                yield
        finally:
            Terminal.write(RESET)
