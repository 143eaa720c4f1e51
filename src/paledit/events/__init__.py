from .bus import Event, EventBus, Subscription
from .palette_events import (
    DocumentRedrawRequestedEvent,
    PaletteChangedEvent,
    ViewRedrawRequestedEvent,
)

__all__ = [
    "DocumentRedrawRequestedEvent",
    "Event",
    "EventBus",
    "PaletteChangedEvent",
    "Subscription",
    "ViewRedrawRequestedEvent",
]
