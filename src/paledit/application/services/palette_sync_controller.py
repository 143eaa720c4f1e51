"""Keep the live palette, the document palette and the undo history in sync."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from ...config import DEFAULT_OPERATION_LABEL
from ...core.selection_editor import SelectionEditor, describe_picks
from ...domain.collaborators import (
    IDocumentContext,
    IPaletteNotifier,
    IPaletteStore,
    ISelectionSource,
)
from ...domain.models import ColorSpace, EditMode, EditPayload, Rgba
from ...domain.palette import Palette, PalettePicks
from ...errors import (
    EditorClosedError,
    InvalidSelectionError,
    NoActiveDocumentError,
    UndoSystemError,
)
from ...errors.handler import ErrorHandler, ErrorSeverity
from ...settings.editor_settings import EditorSettings
from ..commands import SetPaletteRange
from .edit_coalescer import CoalesceDecision, EditCoalescer, EditSession

_LOGGER = logging.getLogger(__name__)


class PaletteSyncController:
    """Apply palette edits and record them in the active document's undo history.

    Every collaborator is injected.  The controller owns the baseline palette
    used by relative edits; the live palette belongs to the palette store and
    is only written through :meth:`commit_edit`.
    """

    def __init__(
        self,
        palette_store: IPaletteStore,
        documents: IDocumentContext,
        selection: ISelectionSource,
        notifier: IPaletteNotifier,
        *,
        coalescer: EditCoalescer,
        editor: Optional[SelectionEditor] = None,
        error_handler: Optional[ErrorHandler] = None,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        self._palette_store = palette_store
        self._documents = documents
        self._selection = selection
        self._notifier = notifier
        self._coalescer = coalescer
        self._editor = editor or SelectionEditor()
        self._error_handler = error_handler
        self._settings = settings or EditorSettings()

        self._colorspace = self._settings.colorspace
        self._mode = self._settings.mode
        self._baseline = palette_store.get_current_palette().copy()
        # Set while this controller broadcasts, so its own notification is not
        # mistaken for an external palette change.
        self._self_palette_change = False
        self._explicit_reset = False
        self._closed = False

        self._coalescer.finalized.connect(self._on_session_finalized)
        self._coalescer.view_redraw_requested.connect(self._on_view_redraw_requested)

    # ------------------------------------------------------------------
    # Accessors
    @property
    def colorspace(self) -> ColorSpace:
        return self._colorspace

    @property
    def mode(self) -> EditMode:
        return self._mode

    @property
    def baseline(self) -> Palette:
        return self._baseline

    @property
    def editor(self) -> SelectionEditor:
        return self._editor

    @property
    def coalescer(self) -> EditCoalescer:
        return self._coalescer

    @property
    def settings(self) -> EditorSettings:
        return self._settings

    def is_closed(self) -> bool:
        return self._closed

    def picks(self, strict: bool = False) -> PalettePicks:
        """Sample the selection source, falling back to the cursor entry.

        With *strict* an empty result raises :class:`InvalidSelectionError`.
        """

        size = self._palette_store.get_current_palette().size()
        picks = PalettePicks.resolve(
            self._selection.get_selected_indices(),
            self._selection.get_selected_entry(),
            size,
        )
        if strict and picks.picks() == 0:
            raise InvalidSelectionError("no palette entry is selected")
        return picks

    def entry_label(self) -> str:
        return describe_picks(self.picks())

    # ------------------------------------------------------------------
    # Editing
    def edit(self, payload: EditPayload, operation_label: Optional[str] = None) -> dict[int, Rgba]:
        """Apply *payload* to the current picks and commit the result.

        Returns the ``{index: color}`` mapping written into the live palette;
        an empty mapping when nothing is picked.
        """

        self._ensure_open()
        label = operation_label or self._settings.operation_label
        edited = self._editor.apply_edit(
            self.picks(),
            self._colorspace,
            self._mode,
            payload,
            live=self._palette_store.get_current_palette(),
            baseline=self._baseline,
        )
        if edited:
            self.commit_edit(edited, label)
        return edited

    def commit_edit(
        self,
        edited_colors: Mapping[int, Rgba],
        operation_label: str = DEFAULT_OPERATION_LABEL,
    ) -> bool:
        """Write *edited_colors* to the live palette and record the change.

        Returns ``True`` when the change reached the undo history.  The live
        palette keeps the edit even when recording is skipped or fails.
        """

        self._ensure_open()
        live = self._palette_store.get_current_palette()
        for index, color in edited_colors.items():
            live.set_entry(index, color)

        document = self._documents.active_document()
        if document is None:
            self._report(
                NoActiveDocumentError("No active document; palette edit kept in the live palette only"),
                ErrorSeverity.INFO,
                {"operation": operation_label},
            )
            return False

        frame = document.current_frame()
        first, last = document.palette(frame).count_diff(live)
        if first > last:
            _LOGGER.debug("Palette edit %r left the document palette unchanged", operation_label)
            return False

        try:
            history = document.undo_history()
            last_command = history.last_executed_command()
            command = SetPaletteRange(document, frame, live, first, last)
            decision = self._coalescer.decide(operation_label, last_command)
            if decision is CoalesceDecision.IMPLANT:
                _LOGGER.debug("Implanting %r into %r", command, operation_label)
                last_command.add(command)
                command.execute()
            else:
                _LOGGER.debug("Recording %r as new transaction %r", command, operation_label)
                transaction = history.begin_transaction(operation_label)
                try:
                    transaction.execute(command)
                    transaction.commit()
                except Exception:
                    # Keep the document palette in step with the history.
                    transaction.rollback()
                    raise
            self._coalescer.record_edit(operation_label, history.last_executed_command())
        except Exception as exc:
            error = UndoSystemError(f"Could not record {operation_label!r}: {exc}")
            error.__cause__ = exc
            self._report(error, ErrorSeverity.ERROR, {"operation": operation_label, "range": (first, last)})
            return False
        return True

    # ------------------------------------------------------------------
    # State changes coming from the editing surface
    def set_colorspace(self, space: ColorSpace) -> None:
        if space is self._colorspace:
            return
        previous = self._colorspace
        self._colorspace = space
        self._finalize_and_reset(previous_space=previous)

    def set_mode(self, mode: EditMode) -> None:
        if mode is self._mode:
            return
        self._mode = mode
        self._finalize_and_reset()

    def selection_changed(self) -> None:
        self._finalize_and_reset()

    def foreground_color_changed(self, index: Optional[int] = None) -> None:
        """React to the eyedropper/foreground color pointing at palette entry *index*.

        ``None`` means the new color is not an indexed one; the cursor entry of
        the selection source is used instead and nothing happens without one.
        """

        if index is None:
            index = self._selection.get_selected_entry()
        if index is None or index < 0:
            return
        self.reset_relative_info()

    def palette_changed(self) -> None:
        """Observer for palette changes made outside this controller (undo, load)."""

        if self._self_palette_change or self._closed:
            return
        self._finalize_and_reset()

    def reset_relative_info(self, previous_space: Optional[ColorSpace] = None) -> None:
        """Snapshot the live palette as the new baseline and clear the deltas.

        With ``reset_alpha_delta_on_colorspace_change`` disabled and
        *previous_space* given, the alpha total survives and the baseline keeps
        its alpha column so the surviving total keeps its origin.
        """

        live = self._palette_store.get_current_palette()
        keep_alpha = (
            previous_space is not None
            and not self._settings.reset_alpha_delta_on_colorspace_change
            and self._baseline.size() == live.size()
        )
        if keep_alpha:
            alpha_total = self._editor.deltas.clear_keeping_alpha(previous_space, self._colorspace)
            previous_baseline = self._baseline
            self._baseline = live.copy()
            if alpha_total:
                self._baseline.copy_alpha_from(previous_baseline)
        else:
            self._editor.reset()
            self._baseline = live.copy()

    def close(self) -> None:
        """Finalize any open session before the editing surface goes away."""

        if self._closed:
            return
        self._coalescer.finalize()
        self._coalescer.finalized.disconnect(self._on_session_finalized)
        self._coalescer.view_redraw_requested.disconnect(self._on_view_redraw_requested)
        self._closed = True

    # ------------------------------------------------------------------
    # Internal utilities
    def _finalize_and_reset(self, previous_space: Optional[ColorSpace] = None) -> None:
        self._explicit_reset = True
        try:
            self._coalescer.finalize()
        finally:
            self._explicit_reset = False
        self.reset_relative_info(previous_space)

    def _on_session_finalized(self, session: EditSession) -> None:
        if not self._explicit_reset:
            self.reset_relative_info()

        self._self_palette_change = True
        try:
            self._notifier.notify_palette_changed()
        finally:
            self._self_palette_change = False

        if self._documents.active_document() is not None:
            self._notifier.notify_document_redraw()

    def _on_view_redraw_requested(self) -> None:
        self._notifier.notify_view_redraw()

    def _ensure_open(self) -> None:
        if self._closed:
            raise EditorClosedError("palette editor is closed")

    def _report(self, error: Exception, severity: ErrorSeverity, context: dict) -> None:
        if self._error_handler is not None:
            self._error_handler.handle(error, severity, context)
            return
        log_method = getattr(_LOGGER, severity.value, _LOGGER.error)
        log_method("%s: %s", error.__class__.__name__, error)
