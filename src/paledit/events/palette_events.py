from dataclasses import dataclass

from .bus import Event


@dataclass(kw_only=True)
class PaletteChangedEvent(Event):
    """Broadcast after an edit session finalizes."""
    source: str = ""


@dataclass(kw_only=True)
class DocumentRedrawRequestedEvent(Event):
    """Every view of the active document should repaint."""
    source: str = ""


@dataclass(kw_only=True)
class ViewRedrawRequestedEvent(Event):
    """Only the currently focused view should repaint."""
    source: str = ""
