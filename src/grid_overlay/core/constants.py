"""Shared constants for the grid overlay and its color picker."""

# ANSI escape sequences
ESC = "\x1b"
CSI = f"{ESC}["
RESET = f"{CSI}0m"

# Grid geometry
COLUMNS_PER_ROW = 15
CELL_WIDTH = 4  # "[xx]" - two content columns plus focus brackets
BORDER = 1

# Class names projected onto elements
FOCUSED_CLASS = "focused"
OVERLAY_CLASS = "grid-overlay"
COLOR_PICKER_CLASS = "color-picker-overlay"

# Swatch ids
SWATCH_PREFIX = "swatch"
CLEAR_SWATCH_ID = "removecolor"
CLEAR_GLYPH = "✖"

# Timing (seconds)
STYLE_SETTLE_DELAY = 0.02  # Heuristic wait before reading back an applied color
PREPARE_INTERVAL = 0.1     # Gap between pre-building overlays for editables

# Default text color palette
DEFAULT_COLORS: tuple[str, ...] = (
    '#FFEE00', 'rgb(255,0,0)', '#FFFF00', '#FFFFFF',
    '#000000', '#993300', '#333300', '#000080', '#333399', '#333333',
    '#800000', '#FF6600', '#FFFF99', '#CCFFFF', '#99CCFF', '#FFFFFF',
    '#808000', '#008000', '#008080', '#0000FF', '#666699', '#808080',
    '#FF0000', '#FF9900', '#99CC00', '#339966', '#33CCCC', '#3366FF',
    '#800080', '#999999', '#FF00FF', '#FFCC00', '#FFFF00', '#00FF00',
    '#00FFFF', '#00CCFF', '#993366', '#C0C0C0', '#FF99CC', '#FFCC99',
)
