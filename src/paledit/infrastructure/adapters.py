"""Small concrete collaborators for hosts without their own implementations."""

from __future__ import annotations

from typing import Iterable, Optional, Set

from ..domain.collaborators import IPaletteNotifier, IPaletteStore, ISelectionSource
from ..domain.palette import Palette
from ..events.bus import EventBus
from ..events.palette_events import (
    DocumentRedrawRequestedEvent,
    PaletteChangedEvent,
    ViewRedrawRequestedEvent,
)


class MemoryPaletteStore(IPaletteStore):
    def __init__(self, palette: Palette) -> None:
        self._palette = palette

    def get_current_palette(self) -> Palette:
        return self._palette

    def set_current_palette(self, palette: Palette) -> None:
        self._palette = palette


class StaticSelection(ISelectionSource):
    """Selection source whose picks and cursor are set programmatically."""

    def __init__(self, indices: Iterable[int] = (), entry: Optional[int] = None) -> None:
        self._indices: Set[int] = set(indices)
        self._entry = entry

    def get_selected_indices(self) -> Set[int]:
        return set(self._indices)

    def get_selected_entry(self) -> Optional[int]:
        return self._entry

    def select(self, indices: Iterable[int], entry: Optional[int] = None) -> None:
        self._indices = set(indices)
        if entry is not None:
            self._entry = entry

    def set_entry(self, entry: Optional[int]) -> None:
        self._entry = entry


class EventBusNotifier(IPaletteNotifier):
    """Publish the editor's notifications as events on an :class:`EventBus`."""

    def __init__(self, event_bus: EventBus, source: str = "palette_editor") -> None:
        self._events = event_bus
        self._source = source

    def notify_palette_changed(self) -> None:
        self._events.publish(PaletteChangedEvent(source=self._source))

    def notify_document_redraw(self) -> None:
        self._events.publish(DocumentRedrawRequestedEvent(source=self._source))

    def notify_view_redraw(self) -> None:
        self._events.publish(ViewRedrawRequestedEvent(source=self._source))
