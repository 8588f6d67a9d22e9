"""Core TUI infrastructure - terminal I/O and input handling."""

from grid_overlay.cli.core.terminal import Terminal, TerminalSize
from grid_overlay.cli.core.input import InputEvent, InputReader

__all__ = [
    "Terminal",
    "TerminalSize",
    "InputEvent",
    "InputReader",
]
