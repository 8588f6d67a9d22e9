"""Color representation for swatches and styled text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from PIL import ImageColor


@dataclass(frozen=True)
class Color:
    """
    A 24-bit RGB color.

    Parsing accepts anything a stylesheet would: ``#RGB``/``#RRGGBB`` hex,
    ``rgb(r, g, b)`` functions and named colors like ``navy``.
    """
    r: int
    g: int
    b: int

    BLACK: ClassVar["Color"]
    WHITE: ClassVar["Color"]

    # Default text color when a character carries no explicit color
    DEFAULT_FG: ClassVar["Color"]

    def __post_init__(self) -> None:
        if not all(0 <= c <= 255 for c in (self.r, self.g, self.b)):
            raise ValueError(f"RGB values must be 0-255, got ({self.r}, {self.g}, {self.b})")

    @classmethod
    def parse(cls, value: str) -> "Color":
        """Create a Color from a hex, rgb() or named color string."""
        try:
            rgb = ImageColor.getrgb(value.strip())
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Not a color: {value!r}") from e
        return cls(rgb[0], rgb[1], rgb[2])

    @classmethod
    def from_rgb(cls, rgb: tuple[int, int, int]) -> "Color":
        return cls(rgb[0], rgb[1], rgb[2])

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        """Uppercase ``#RRGGBB`` representation."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @property
    def css(self) -> str:
        """Computed-style representation, e.g. ``rgb(255, 0, 0)``."""
        return f"rgb({self.r}, {self.g}, {self.b})"

    def is_dark(self) -> bool:
        return (self.r + self.g + self.b) < 384

    def to_sgr_fg(self) -> str:
        """Return SGR parameters for a true-color foreground."""
        return f"38;2;{self.r};{self.g};{self.b}"

    def to_sgr_bg(self) -> str:
        """Return SGR parameters for a true-color background."""
        return f"48;2;{self.r};{self.g};{self.b}"


def to_hex(value: str) -> str | None:
    """Normalize a color string to ``#RRGGBB``, or None if it isn't one."""
    try:
        return Color.parse(value).hex
    except ValueError:
        return None


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)
Color.DEFAULT_FG = Color(170, 170, 170)
