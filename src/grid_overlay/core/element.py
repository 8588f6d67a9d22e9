"""Element tree with page geometry and projected style."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from grid_overlay.core.color import Color
from grid_overlay.core.events import EventTarget

if TYPE_CHECKING:
    from grid_overlay.core.document import Document


class Display(Enum):
    """Display mode of an element."""
    NONE = "none"
    BLOCK = "block"
    INLINE = "inline"
    TABLE = "table"


class PositionMode(Enum):
    """How an element's top/left are interpreted."""
    STATIC = "static"        # Relative to the parent
    ABSOLUTE = "absolute"    # Relative to the parent, out of flow
    FIXED = "fixed"          # Relative to the viewport


@dataclass(frozen=True)
class Offset:
    """A top/left position in rows and columns."""
    top: int
    left: int

    def translate(self, dy: int = 0, dx: int = 0) -> Offset:
        return Offset(self.top + dy, self.left + dx)


@dataclass
class Style:
    """Presentation state of an element."""
    display: Display = Display.BLOCK
    position: PositionMode = PositionMode.STATIC
    background: Optional[Color] = None
    color: Optional[Color] = None


class Element(EventTarget):
    """
    A node in a document.

    Geometry is kept in terminal cells: `top`/`left` are relative to the
    parent (or to the viewport for fixed elements), `width`/`height` size
    the hit box.
    """

    def __init__(
        self,
        tag: str = "div",
        *,
        text: str = "",
        classes: Iterable[str] = (),
        role: Optional[str] = None,
        top: int = 0,
        left: int = 0,
        width: int = 0,
        height: int = 0,
        style: Optional[Style] = None,
    ) -> None:
        super().__init__()
        self.tag = tag
        self.text = text
        self.classes: set[str] = set(classes)
        self.role = role
        self.top = top
        self.left = left
        self.width = width
        self.height = height
        self.style = style or Style()
        self.parent: Optional[Element] = None
        self.children: list[Element] = []
        self._owner: Optional[Document] = None  # Only set on a document's body

    def __repr__(self) -> str:
        classes = f" .{'.'.join(sorted(self.classes))}" if self.classes else ""
        return f"<{self.tag}{classes}>"

    # -------------------------------------------------------------------------
    # Tree
    # -------------------------------------------------------------------------

    @property
    def parent_target(self) -> Optional[EventTarget]:
        return self.parent if self.parent is not None else self._owner

    @property
    def document(self) -> Optional[Document]:
        """Owning document, or None while detached."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node._owner

    def append(self, child: Element) -> Element:
        """Append child, moving it from any previous parent."""
        if child.contains(self):
            raise ValueError(f"Cannot append {child!r} into its own subtree")
        child.remove()
        child.parent = self
        self.children.append(child)
        return child

    def remove(self) -> None:
        """Detach from the parent."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def clear_children(self) -> None:
        for child in list(self.children):
            child.remove()

    def contains(self, other: Optional[Element]) -> bool:
        """True if other is this element or one of its descendants."""
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def iter_descendants(self) -> Iterator[Element]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def find_all(self, class_name: str) -> list[Element]:
        return [el for el in self.iter_descendants() if class_name in el.classes]

    # -------------------------------------------------------------------------
    # Classes
    # -------------------------------------------------------------------------

    def add_class(self, name: str) -> None:
        self.classes.add(name)

    def remove_class(self, name: str) -> None:
        self.classes.discard(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def toggle_class(self, name: str, on: bool) -> None:
        if on:
            self.classes.add(name)
        else:
            self.classes.discard(name)

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def move_to(self, offset: Offset) -> None:
        self.top = offset.top
        self.left = offset.left

    def page_offset(self) -> Offset:
        """Position relative to the top-left of the document."""
        if self.style.position is PositionMode.FIXED:
            doc = self.document
            if doc is None:
                return Offset(self.top, self.left)
            return Offset(self.top + doc.scroll_top, self.left + doc.scroll_left)
        if self.parent is None:
            return Offset(self.top, self.left)
        base = self.parent.page_offset()
        return base.translate(self.top, self.left)

    def is_displayed(self) -> bool:
        """True if neither this element nor an ancestor is display: none."""
        node: Optional[Element] = self
        while node is not None:
            if node.style.display is Display.NONE:
                return False
            node = node.parent
        return True

    def hit_test(self, top: int, left: int) -> Optional[Element]:
        """Deepest displayed element whose box contains the page point."""
        if self.style.display is Display.NONE:
            return None
        # Later children paint on top
        for child in reversed(self.children):
            hit = child.hit_test(top, left)
            if hit is not None:
                return hit
        origin = self.page_offset()
        if (origin.top <= top < origin.top + self.height
                and origin.left <= left < origin.left + self.width):
            return self
        return None
