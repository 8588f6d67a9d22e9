"""Host-side collaborators: bus, timers, overlay registry and the text color picker."""

from grid_overlay.host.bus import Message, MessageBus, Topic
from grid_overlay.host.editable import Editable, StyledText, TextRange
from grid_overlay.host.registry import OverlayRegistry
from grid_overlay.host.scheduler import Scheduler, Timer
from grid_overlay.host.text_color import TextColorPicker

__all__ = [
    "Message",
    "MessageBus",
    "Topic",
    "Editable",
    "StyledText",
    "TextRange",
    "OverlayRegistry",
    "Scheduler",
    "Timer",
    "TextColorPicker",
]
