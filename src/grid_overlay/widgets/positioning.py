"""Positioning of floating widgets relative to their anchor."""

from __future__ import annotations

from grid_overlay.core.element import Element, Offset, PositionMode


def calculate_offset(element: Element, position_mode: PositionMode | str) -> Offset:
    """
    Calculate the offset at which to position a floating element.

    Args:
        element: Element around which to calculate the offset
        position_mode: Positioning of the floating element. In fixed mode it
            tracks the viewport, so the document scroll is subtracted.

    Returns:
        The element's document offset, converted to viewport coordinates
        when position_mode is fixed.
    """
    offset = element.page_offset()
    if PositionMode(position_mode) is PositionMode.FIXED:
        doc = element.document
        if doc is not None:
            offset = offset.translate(-doc.scroll_top, -doc.scroll_left)
    return offset


def below(element: Element, position_mode: PositionMode | str) -> Offset:
    """Offset of the row just under element."""
    return calculate_offset(element, position_mode).translate(dy=max(1, element.height))
