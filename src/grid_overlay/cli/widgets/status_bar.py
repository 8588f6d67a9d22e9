"""Status bar widget for displaying info and shortcuts."""

from __future__ import annotations

from dataclasses import dataclass

from grid_overlay.core.ansi_text import visible_len
from grid_overlay.widgets.base import BaseWidget, Rect


@dataclass
class Shortcut:
    """A keyboard shortcut to display."""
    key: str
    label: str


class StatusBarWidget(BaseWidget):
    """Bottom status bar showing a message and keyboard shortcuts."""

    def __init__(self) -> None:
        super().__init__()
        self._left_text: str = ""
        self._shortcuts: list[Shortcut] = []

    def set_left(self, text: str) -> None:
        """Set left-aligned text."""
        self._left_text = text

    def set_shortcuts(self, shortcuts: list[Shortcut]) -> None:
        self._shortcuts = shortcuts

    def render(self, bounds: Rect) -> list[str]:
        """Render the status bar, fitting within bounds.width."""
        width = bounds.width

        # Build shortcuts from right, only include what fits
        shortcut_parts: list[str] = []
        shortcuts_visible_len = 0
        for sc in reversed(self._shortcuts):
            part = f"\x1b[7m {sc.key} \x1b[0;100;36m {sc.label} "
            part_len = visible_len(part)
            # Reserve space for the message
            if shortcuts_visible_len + part_len + 20 < width:
                shortcut_parts.insert(0, part)
                shortcuts_visible_len += part_len
            else:
                break

        available = max(0, width - shortcuts_visible_len - 2)
        left = f" {self._left_text}"
        if len(left) > available:
            left = left[:max(0, available - 1)] + "…"

        padding = " " * max(0, width - len(left) - shortcuts_visible_len)
        return [f"\x1b[100m\x1b[97m{left}{padding}{''.join(shortcut_parts)}\x1b[0m"]
