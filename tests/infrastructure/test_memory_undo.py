from __future__ import annotations

import pytest

from paledit.application.commands import SetPaletteRange
from paledit.domain.models import Rgba
from paledit.domain.palette import Palette
from paledit.errors import UndoSystemError
from paledit.infrastructure.memory_undo import (
    CommandSequence,
    MemoryDocument,
    MemoryDocumentContext,
    MemoryUndoHistory,
)


@pytest.fixture
def document():
    return MemoryDocument(Palette.from_colors([Rgba(0, 0, 0), Rgba(1, 1, 1), Rgba(2, 2, 2)]))


def _edit(document, index, color):
    live = document.palette(0).copy()
    live.set_entry(index, color)
    return SetPaletteRange(document, 0, live, index, index)


def test_set_palette_range_round_trip(document):
    command = _edit(document, 1, Rgba(9, 9, 9))
    command.execute()
    assert document.palette(0).get_entry(1) == Rgba(9, 9, 9, 255)
    command.undo()
    assert document.palette(0).get_entry(1) == Rgba(1, 1, 1, 255)
    assert command.range == (1, 1)
    assert command.frame == 0


def test_set_palette_range_rejects_empty_range(document):
    with pytest.raises(ValueError):
        SetPaletteRange(document, 0, document.palette(0), 2, 1)


def test_transaction_commit_pushes_sequence(document):
    history = document.undo_history()
    transaction = history.begin_transaction("Color Change")
    transaction.execute(_edit(document, 0, Rgba(5, 5, 5)))
    transaction.commit()

    last = history.last_executed_command()
    assert isinstance(last, CommandSequence)
    assert last.label() == "Color Change"
    assert len(last) == 1
    with pytest.raises(UndoSystemError):
        transaction.commit()


def test_empty_transaction_is_not_recorded():
    history = MemoryUndoHistory()
    history.begin_transaction("Nothing").commit()
    assert history.last_executed_command() is None


def test_rollback_reverts_executed_commands(document):
    transaction = document.undo_history().begin_transaction("Color Change")
    transaction.execute(_edit(document, 2, Rgba(7, 7, 7)))
    transaction.rollback()
    assert document.palette(0).get_entry(2) == Rgba(2, 2, 2, 255)
    assert document.undo_history().last_executed_command() is None


def test_undo_redo_of_implanted_sequence(document):
    history = document.undo_history()
    transaction = history.begin_transaction("Color Change")
    transaction.execute(_edit(document, 0, Rgba(10, 0, 0)))
    transaction.commit()

    implanted = _edit(document, 0, Rgba(20, 0, 0))
    history.last_executed_command().add(implanted)
    implanted.execute()

    history.undo()
    assert document.palette(0).get_entry(0) == Rgba(0, 0, 0, 255)
    assert history.can_redo()
    history.redo()
    assert document.palette(0).get_entry(0) == Rgba(20, 0, 0, 255)


def test_history_limit_drops_oldest(document):
    history = MemoryUndoHistory(history_limit=2)
    for label in ("a", "b", "c"):
        sequence = history.begin_transaction(label)
        sequence.execute(_edit(document, 0, Rgba(len(label), 0, 0)))
        sequence.commit()
    assert [t.label() for t in history.transactions()] == ["b", "c"]


def test_new_transaction_clears_redo(document):
    history = document.undo_history()
    for color in (Rgba(1, 0, 0), Rgba(2, 0, 0)):
        transaction = history.begin_transaction("Color Change")
        transaction.execute(_edit(document, 0, color))
        transaction.commit()
    history.undo()
    transaction = history.begin_transaction("Other")
    transaction.execute(_edit(document, 1, Rgba(3, 3, 3)))
    transaction.commit()
    assert not history.can_redo()


def test_frames_have_separate_palettes(document):
    document.set_current_frame(3)
    assert document.current_frame() == 3
    assert document.palette(3) == document.palette(0)
    assert document.palette(3) is not document.palette(0)
    with pytest.raises(UndoSystemError):
        document.palette(8)


def test_document_context():
    context = MemoryDocumentContext()
    assert context.active_document() is None
    document = MemoryDocument(Palette(1))
    context.set_active_document(document)
    assert context.active_document() is document


def test_failed_push_leaves_transaction_rollbackable(document):
    class FullHistory(MemoryUndoHistory):
        def _push(self, sequence):
            raise RuntimeError("history storage unavailable")

    transaction = FullHistory().begin_transaction("Color Change")
    transaction.execute(_edit(document, 0, Rgba(5, 5, 5)))
    with pytest.raises(RuntimeError):
        transaction.commit()

    assert not transaction.is_committed()
    transaction.rollback()
    assert document.palette(0).get_entry(0) == Rgba(0, 0, 0, 255)
