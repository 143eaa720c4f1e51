"""Expose palette editor notifications as Qt signals."""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from ...domain.collaborators import IPaletteNotifier


class QtPaletteNotifier(QObject):
    """Qt-facing :class:`IPaletteNotifier` for widget-based hosts."""

    paletteChanged = Signal()
    """Emitted once an edit session finalizes."""

    documentRedrawRequested = Signal()
    """Every editor showing the document should repaint."""

    viewRedrawRequested = Signal()
    """Only the focused editor should repaint."""

    def notify_palette_changed(self) -> None:
        self.paletteChanged.emit()

    def notify_document_redraw(self) -> None:
        self.documentRedrawRequested.emit()

    def notify_view_redraw(self) -> None:
        self.viewRedrawRequested.emit()


# QObject and ABCMeta metaclasses cannot be combined, so register virtually.
IPaletteNotifier.register(QtPaletteNotifier)
