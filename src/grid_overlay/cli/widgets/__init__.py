"""Terminal-only widgets."""

from grid_overlay.cli.widgets.status_bar import Shortcut, StatusBarWidget

__all__ = [
    "Shortcut",
    "StatusBarWidget",
]
