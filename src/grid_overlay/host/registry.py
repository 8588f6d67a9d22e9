"""Per-context overlay registry owned by the host application."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from grid_overlay.widgets.overlay import Overlay

logger = logging.getLogger(__name__)


class OverlayRegistry:
    """
    Maps context ids to their overlay.

    Overlays are created lazily on first use and kept, hidden, until the
    context goes away and the host calls `dispose`.
    """

    def __init__(self) -> None:
        self._overlays: dict[str, Overlay] = {}

    def __contains__(self, context_id: object) -> bool:
        return context_id in self._overlays

    def __len__(self) -> int:
        return len(self._overlays)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._overlays))

    def get(self, context_id: str) -> Optional[Overlay]:
        return self._overlays.get(context_id)

    def get_or_create(self, context_id: str, factory: Callable[[], Overlay]) -> Overlay:
        """Return the context's overlay, building it with factory if needed."""
        overlay = self._overlays.get(context_id)
        if overlay is None:
            overlay = factory()
            self._overlays[context_id] = overlay
            logger.debug("Created overlay for context %r (%d cells)", context_id, len(overlay.items))
        return overlay

    def dispose(self, context_id: str) -> bool:
        """Dispose and forget a context's overlay. Returns False if none."""
        overlay = self._overlays.pop(context_id, None)
        if overlay is None:
            return False
        overlay.dispose()
        logger.debug("Disposed overlay for context %r", context_id)
        return True

    def dispose_all(self) -> None:
        for context_id in list(self._overlays):
            self.dispose(context_id)
