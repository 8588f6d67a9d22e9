"""
grid-overlay: floating grid-selection overlays for terminal UIs

A reusable overlay widget presenting a fixed set of choices as a grid of
cells, driven by mouse and keyboard, plus a text color picker built on it.

Quick Start:
    >>> from grid_overlay import *
    >>> doc = Document()
    >>> button = doc.body.append(Element("button", width=3, height=1))
    >>> overlay = Overlay(["a", "b", "c"], SelectionCallback(print), button, doc)
    >>> overlay.show(button, calculate_offset(button, "fixed"))
    >>> _ = doc.press(Key.RIGHT)
    >>> _ = doc.press(Key.ENTER)
    b

Features:
    - Keyboard navigation with exclusive focus and no edge wrapping
    - Dismissal on outside click and Escape, exempting the trigger control
    - Viewport-aware positioning next to an anchor
    - Color swatch palettes with reverse lookup from computed styles
    - Interactive terminal picker (`grid-overlay pick`)
"""

__version__ = "0.1.0"

# Core types
from grid_overlay.core.color import Color
from grid_overlay.core.document import Document
from grid_overlay.core.element import Element, Offset, PositionMode
from grid_overlay.core.events import EventType, Priority
from grid_overlay.core.keys import Key, KeyEvent

# Widgets
from grid_overlay.widgets.overlay import Overlay, SelectionCallback, SelectionListener, Visibility
from grid_overlay.widgets.positioning import calculate_offset

# Palette
from grid_overlay.palette.swatches import CLEAR_SWATCH, Swatch, SwatchIndex, generate_swatches

# Configuration
from grid_overlay.config import ConfigError, PickerConfig, load_config

__all__ = [
    # Version
    "__version__",
    # Core types
    "Color",
    "Document",
    "Element",
    "Offset",
    "PositionMode",
    "EventType",
    "Priority",
    "Key",
    "KeyEvent",
    # Widgets
    "Overlay",
    "SelectionCallback",
    "SelectionListener",
    "Visibility",
    "calculate_offset",
    # Palette
    "CLEAR_SWATCH",
    "Swatch",
    "SwatchIndex",
    "generate_swatches",
    # Configuration
    "ConfigError",
    "PickerConfig",
    "load_config",
]
