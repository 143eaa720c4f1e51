from __future__ import annotations

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for Qt scheduler tests", exc_type=ImportError)
pytest.importorskip("PySide6.QtTest", reason="Qt test helpers not available", exc_type=ImportError)

from PySide6.QtTest import QSignalSpy

from paledit.application.services.edit_coalescer import EditCoalescer, TickPhase
from paledit.bootstrap import create_qt_editor_context
from paledit.domain.models import Channel, ColorPayload, Rgba
from paledit.domain.palette import Palette
from paledit.gui.qt.notifier import QtPaletteNotifier
from paledit.gui.qt.tick_scheduler import QtTickScheduler
from paledit.infrastructure.memory_undo import CommandSequence
from paledit.settings.editor_settings import EditorSettings


def test_scheduler_fires_while_started(qtbot):
    ticks = []
    scheduler = QtTickScheduler(lambda: ticks.append(1), interval_ms=10)
    assert scheduler.interval() == 10
    assert not scheduler.is_running()

    scheduler.start()
    assert scheduler.is_running()
    qtbot.waitUntil(lambda: len(ticks) >= 2, timeout=2000)
    scheduler.stop()
    assert not scheduler.is_running()


def test_coalescer_finalizes_after_two_ticks(qtbot):
    scheduler = QtTickScheduler(interval_ms=10)
    coalescer = EditCoalescer(scheduler)
    scheduler.bind(coalescer.tick)
    finalized = []
    coalescer.finalized.connect(finalized.append)

    coalescer.record_edit("Color Change", CommandSequence("Color Change"))
    qtbot.waitUntil(lambda: bool(finalized), timeout=2000)

    assert coalescer.phase is TickPhase.IDLE
    assert not scheduler.is_running()
    assert coalescer.tick_count == 2


def test_notifier_emits_qt_signals(qtbot):
    notifier = QtPaletteNotifier()
    with qtbot.waitSignal(notifier.paletteChanged, timeout=500):
        notifier.notify_palette_changed()
    with qtbot.waitSignal(notifier.viewRedrawRequested, timeout=500):
        notifier.notify_view_redraw()
    with qtbot.waitSignal(notifier.documentRedrawRequested, timeout=500):
        notifier.notify_document_redraw()


def test_qt_context_broadcasts_after_coalescing_window(qtbot):
    palette = Palette.from_colors([Rgba(0, 0, 0), Rgba(9, 9, 9)])
    context = create_qt_editor_context(palette, settings=EditorSettings(coalesce_window_ms=10))
    assert context.scheduler.interval() == 10
    context.open_document()
    context.selection.select([0])
    palette_spy = QSignalSpy(context.notifier.paletteChanged)
    redraw_spy = QSignalSpy(context.notifier.documentRedrawRequested)

    context.controller.edit(ColorPayload(Rgba(1, 2, 3), Channel.RED))
    qtbot.waitUntil(lambda: redraw_spy.count() == 1, timeout=2000)

    assert palette_spy.count() == 1
    assert not context.coalescer.is_open()
    assert context.documents.active_document().palette(0).get_entry(0) == Rgba(1, 2, 3, 255)
    context.close()
