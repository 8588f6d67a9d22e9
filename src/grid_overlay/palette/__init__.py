"""Palette adapter: color values to overlay payloads and back."""

from grid_overlay.palette.swatches import (
    CLEAR_SWATCH,
    Swatch,
    SwatchIndex,
    find_swatch,
    generate_swatches,
    is_color,
    make_swatch,
)

__all__ = [
    "CLEAR_SWATCH",
    "Swatch",
    "SwatchIndex",
    "find_swatch",
    "generate_swatches",
    "is_color",
    "make_swatch",
]
