"""Widget protocol and the screen rectangle widgets render into."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from grid_overlay.core.element import Offset
from grid_overlay.core.keys import KeyEvent


@dataclass
class Rect:
    """Screen area in columns (x) and rows (y)."""
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def clipped(cls, origin: Offset, screen_width: int, screen_height: int) -> Rect:
        """The part of the screen from origin to the bottom-right corner."""
        return cls(
            origin.left,
            origin.top,
            max(0, screen_width - origin.left),
            max(0, screen_height - origin.top),
        )


@runtime_checkable
class Widget(Protocol):
    """Anything that renders to lines and may consume keys."""

    @property
    def visible(self) -> bool:
        ...

    def render(self, bounds: Rect) -> list[str]:
        ...

    def handle_input(self, event: KeyEvent) -> bool:
        ...


class BaseWidget(ABC):
    """Always-visible widget that ignores input."""

    @property
    def visible(self) -> bool:
        return True

    @abstractmethod
    def render(self, bounds: Rect) -> list[str]:
        """Render content as a list of lines no wider than bounds.width."""

    def handle_input(self, event: KeyEvent) -> bool:
        return False
