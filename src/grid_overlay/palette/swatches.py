"""Color swatches as overlay cell payloads.

The overlay never interprets colors. This module turns a configured list
of color values into `Swatch` payloads, appends the clear option, and maps
computed styles back to stable swatch ids so a picker can pre-focus the
swatch matching the current color.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from grid_overlay.core.ansi_text import styled, truncate_and_pad
from grid_overlay.core.color import Color, to_hex
from grid_overlay.core.constants import CELL_WIDTH, CLEAR_GLYPH, CLEAR_SWATCH_ID, SWATCH_PREFIX

_LABEL_WIDTH = CELL_WIDTH - 2


def is_color(value: str) -> bool:
    """True for literal color values (hex or rgb()), False for keywords."""
    return value.startswith('#') or value.startswith('rgb')


@dataclass(frozen=True)
class Swatch:
    """
    One cell payload of the color picker.

    Attributes:
        swatch_id: Stable id from the reference palette, if the color is in it
        value: The configured value, e.g. ``#FFEE00``, ``rgb(255,0,0)``, ``navy``
        color: Resolved color; None for the clear swatch and unknown keywords
        clear: Selecting this swatch removes the color instead of setting one
    """
    swatch_id: Optional[str]
    value: str
    color: Optional[Color] = None
    clear: bool = False

    @property
    def markup(self) -> str:
        """Cell label: a block of the color, or a short text label."""
        if self.clear:
            return styled(truncate_and_pad(CLEAR_GLYPH, _LABEL_WIDTH), "91")
        if self.color is not None:
            return styled(" " * _LABEL_WIDTH, self.color.to_sgr_bg())
        return truncate_and_pad(self.value, _LABEL_WIDTH)

    def __str__(self) -> str:
        return self.markup


CLEAR_SWATCH = Swatch(CLEAR_SWATCH_ID, "", clear=True)


class SwatchIndex:
    """
    Stable ids for a reference palette.

    The color at position N is ``swatchN``. Ids are keyed by color, not by
    spelling: ``#FF0000`` listed after ``rgb(255,0,0)`` shares its id, and
    a repeated ``#FFFFFF`` keeps the id of its first position rather than
    taking the last one. Appending duplicates to a palette therefore never
    renumbers a swatch that is already styled.

    Ids can be looked up by the configured value or by any style string
    that names the same color, such as the computed ``rgb(255, 0, 0)``.
    """

    def __init__(self, colors: Iterable[str]) -> None:
        self._index: dict[str, str] = {}
        for i, value in enumerate(colors):
            hex_value = to_hex(value)
            swatch_id = (
                self._index.get(value)
                or (hex_value and self._index.get(hex_value))
                or f"{SWATCH_PREFIX}{i}"
            )
            self._index.setdefault(value, swatch_id)
            if hex_value:
                self._index.setdefault(hex_value, swatch_id)

    def __len__(self) -> int:
        return len(set(self._index.values()))

    def __contains__(self, style: object) -> bool:
        return isinstance(style, str) and self.lookup(style) is not None

    def lookup(self, style: Optional[str]) -> Optional[str]:
        """Swatch id for a raw value or computed style, or None."""
        if not style:
            return None
        if style in self._index:
            return self._index[style]
        hex_value = to_hex(style)
        return self._index.get(hex_value) if hex_value else None


def make_swatch(value: str, index: SwatchIndex) -> Swatch:
    """
    Build the swatch for one configured value.

    Raises:
        ValueError: If value looks like a literal color but cannot be parsed
    """
    if is_color(value):
        color: Optional[Color] = Color.parse(value)
    else:
        hex_value = to_hex(value)
        color = Color.parse(hex_value) if hex_value else None
    return Swatch(index.lookup(value), value, color)


def generate_swatches(colors: Iterable[str], index: SwatchIndex) -> list[Swatch]:
    """Swatches for colors in order, followed by the clear swatch."""
    swatches = [make_swatch(value, index) for value in colors]
    swatches.append(CLEAR_SWATCH)
    return swatches


def find_swatch(swatches: Sequence[Swatch], swatch_id: Optional[str]) -> Optional[int]:
    """Position of the first swatch with swatch_id."""
    if swatch_id is None:
        return None
    for i, swatch in enumerate(swatches):
        if swatch.swatch_id == swatch_id:
            return i
    return None
