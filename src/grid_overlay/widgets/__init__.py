"""Reusable widgets."""

from grid_overlay.widgets.base import BaseWidget, Rect, Widget
from grid_overlay.widgets.overlay import Overlay, SelectionCallback, SelectionListener, Visibility
from grid_overlay.widgets.positioning import below, calculate_offset

__all__ = [
    "BaseWidget",
    "Rect",
    "Widget",
    "Overlay",
    "SelectionCallback",
    "SelectionListener",
    "Visibility",
    "below",
    "calculate_offset",
]
