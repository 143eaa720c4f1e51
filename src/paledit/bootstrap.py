"""Wire the palette editor's collaborators together."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .application.services.edit_coalescer import EditCoalescer
from .application.services.palette_sync_controller import PaletteSyncController
from .core.selection_editor import SelectionEditor
from .domain.collaborators import (
    IDocumentContext,
    IPaletteNotifier,
    IPaletteStore,
    ISelectionSource,
)
from .domain.palette import Palette
from .errors.handler import ErrorHandler
from .events.bus import EventBus, Subscription
from .events.palette_events import PaletteChangedEvent
from .infrastructure.adapters import EventBusNotifier, MemoryPaletteStore, StaticSelection
from .infrastructure.memory_undo import MemoryDocument, MemoryDocumentContext, MemoryUndoHistory
from .infrastructure.schedulers import ManualTickScheduler
from .settings.editor_settings import EditorSettings

if TYPE_CHECKING:  # pragma: no cover - only for type checking
    from PySide6.QtCore import QObject

    from .settings.manager import SettingsManager


@dataclass
class EditorContext:
    """Container object holding one palette editor and its collaborators."""

    palette_store: IPaletteStore
    documents: IDocumentContext = field(default_factory=MemoryDocumentContext)
    selection: ISelectionSource = field(default_factory=StaticSelection)
    settings: EditorSettings = field(default_factory=EditorSettings)
    event_bus: EventBus = field(default_factory=EventBus)
    scheduler: object = field(default_factory=ManualTickScheduler)
    notifier: Optional[IPaletteNotifier] = None
    error_handler: Optional[ErrorHandler] = None
    coalescer: EditCoalescer = field(init=False)
    controller: PaletteSyncController = field(init=False)
    _subscription: Optional[Subscription] = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        if self.notifier is None:
            self.notifier = EventBusNotifier(self.event_bus)
        if self.error_handler is None:
            self.error_handler = ErrorHandler(logging.getLogger("paledit"), self.event_bus)

        self.coalescer = EditCoalescer(self.scheduler)
        self.scheduler.bind(self.coalescer.tick)
        self.controller = PaletteSyncController(
            self.palette_store,
            self.documents,
            self.selection,
            self.notifier,
            coalescer=self.coalescer,
            editor=SelectionEditor(),
            error_handler=self.error_handler,
            settings=self.settings,
        )
        # The controller hears its own broadcast too and ignores it.
        self._subscription = self.event_bus.subscribe(
            PaletteChangedEvent, lambda _event: self.controller.palette_changed()
        )

    def open_document(self, palette: Optional[Palette] = None) -> MemoryDocument:
        """Activate an in-memory document whose history honours ``history_limit``.

        The document palette starts as a copy of *palette*, or of the live
        palette when omitted.
        """

        if not isinstance(self.documents, MemoryDocumentContext):
            raise TypeError("open_document() needs a MemoryDocumentContext")
        source = palette if palette is not None else self.palette_store.get_current_palette()
        document = MemoryDocument(
            source.copy(),
            history=MemoryUndoHistory(self.settings.history_limit),
        )
        self.documents.set_active_document(document)
        self.controller.palette_changed()
        return document

    def close(self) -> None:
        self.controller.close()
        if self._subscription is not None:
            self.event_bus.unsubscribe(self._subscription)
            self._subscription = None


def create_editor_context(palette: Palette, **kwargs) -> EditorContext:
    """Return a headless context editing *palette*."""

    return EditorContext(palette_store=MemoryPaletteStore(palette), **kwargs)


def create_qt_editor_context(
    palette: Palette,
    *,
    settings_manager: "SettingsManager | None" = None,
    settings: Optional[EditorSettings] = None,
    parent: "QObject | None" = None,
    **kwargs,
) -> EditorContext:
    """Return a context whose tick runs on a ``QTimer`` and notifies through Qt signals.

    Explicit *settings* win over the ones read from *settings_manager*.
    """

    from .gui.qt.notifier import QtPaletteNotifier
    from .gui.qt.tick_scheduler import QtTickScheduler

    if settings is None:
        settings = settings_manager.editor_settings() if settings_manager is not None else EditorSettings()
    return EditorContext(
        palette_store=MemoryPaletteStore(palette),
        settings=settings,
        scheduler=QtTickScheduler(interval_ms=settings.coalesce_window_ms, parent=parent),
        notifier=QtPaletteNotifier(parent),
        **kwargs,
    )
