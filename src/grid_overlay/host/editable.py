"""Editable text regions with per-character color."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from grid_overlay.core.ansi_text import styled
from grid_overlay.core.color import Color
from grid_overlay.core.element import Element


@dataclass(frozen=True)
class TextRange:
    """Half-open character range [start, end)."""
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid range [{self.start}, {self.end})")

    @property
    def collapsed(self) -> bool:
        return self.start == self.end

    def clamp(self, length: int) -> TextRange:
        return TextRange(min(self.start, length), min(self.end, length))

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.end


class StyledText:
    """Text where each character may carry an explicit color."""

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._colors: list[Optional[Color]] = [None] * len(text)

    def __len__(self) -> int:
        return len(self._text)

    @property
    def text(self) -> str:
        return self._text

    def color_at(self, index: int) -> Optional[Color]:
        """Explicit color at index, or None."""
        return self._colors[index]

    def computed_color(self, index: int) -> Color:
        """Color the character at index is shown in (clamped to the text)."""
        if not self._colors:
            return Color.DEFAULT_FG
        index = max(0, min(index, len(self._colors) - 1))
        return self._colors[index] or Color.DEFAULT_FG

    def set_color(self, text_range: TextRange, color: Color) -> None:
        text_range = text_range.clamp(len(self))
        for i in range(text_range.start, text_range.end):
            self._colors[i] = color

    def unset_color(self, text_range: TextRange) -> None:
        text_range = text_range.clamp(len(self))
        for i in range(text_range.start, text_range.end):
            self._colors[i] = None

    def runs(self) -> Iterator[tuple[int, int, Optional[Color]]]:
        """Yield (start, end, color) for each run of equally colored text."""
        start = 0
        for i in range(1, len(self._colors) + 1):
            if i == len(self._colors) or self._colors[i] != self._colors[start]:
                yield start, i, self._colors[start]
                start = i

    def render(self, selection: Optional[TextRange] = None, caret: Optional[int] = None) -> str:
        """Render as ANSI; the selection shows in reverse video."""
        parts: list[str] = []
        for i, ch in enumerate(self._text):
            params = [(self._colors[i] or Color.DEFAULT_FG).to_sgr_fg()]
            if (selection is not None and i in selection) or i == caret:
                params.append("7")
            parts.append(styled(ch, *params))
        if caret is not None and caret >= len(self._text):
            parts.append(styled(" ", "7"))
        return "".join(parts)


class Editable:
    """
    A context the user edits: its own id, element, text and selection.

    Each editable gets its own color picker overlay.
    """

    def __init__(self, editable_id: str, text: str = "", element: Optional[Element] = None) -> None:
        self.id = editable_id
        self.text = StyledText(text)
        self.element = element or Element("div", classes=("editable",), text=text, width=len(text), height=1)
        self.selection: Optional[TextRange] = None
        self.caret = 0

    def __repr__(self) -> str:
        return f"Editable({self.id!r})"

    def select(self, text_range: Optional[TextRange]) -> None:
        self.selection = text_range.clamp(len(self.text)) if text_range is not None else None
        if self.selection is not None:
            self.caret = self.selection.end

    def move_caret(self, delta: int, extend: bool = False) -> None:
        """Move the caret, optionally growing the selection from its anchor."""
        anchor = self.caret
        if extend and self.selection is not None and not self.selection.collapsed:
            anchor = self.selection.start if self.caret == self.selection.end else self.selection.end
        self.caret = max(0, min(len(self.text), self.caret + delta))
        if extend:
            self.selection = TextRange(min(anchor, self.caret), max(anchor, self.caret))
        else:
            self.selection = TextRange(self.caret, self.caret)
