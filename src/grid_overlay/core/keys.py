"""Named keys and keyboard events shared by widgets and input readers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()
    INSERT = auto()
    F1 = auto()


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard input event."""
    key: Optional[Key] = None  # Named key if recognized
    char: Optional[str] = None  # Character if printable
    raw: str = ""  # Raw escape sequence
    shift: bool = False

    @property
    def is_char(self) -> bool:
        """Check if this is a printable character."""
        return self.char is not None and self.key is None

    @classmethod
    def named(cls, key: Key) -> KeyEvent:
        return cls(key=key)

    @classmethod
    def of_char(cls, char: str) -> KeyEvent:
        return cls(char=char, raw=char)


@dataclass(frozen=True)
class MouseEvent:
    """A pointer report in 0-indexed screen coordinates."""
    x: int
    y: int
    button: int = 0
    pressed: bool = True
    motion: bool = False
    raw: str = ""

    @property
    def is_click(self) -> bool:
        """A left-button press that is not a drag."""
        return self.pressed and not self.motion and self.button == 0
