"""In-memory implementation of the document/undo-history contracts.

Hosts embedding the editor normally provide their own document model; this
module backs the bundled :class:`~paledit.bootstrap.EditorContext` and the
tests.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..config import DEFAULT_HISTORY_LIMIT
from ..domain.collaborators import (
    ICommandHandle,
    IDocumentContext,
    IPaletteDocument,
    ITransaction,
    IUndoCommand,
    IUndoHistory,
)
from ..domain.palette import Palette
from ..errors import UndoSystemError

_LOGGER = logging.getLogger(__name__)


class CommandSequence(ICommandHandle, IUndoCommand):
    """Labelled group of commands undone and redone as one step."""

    def __init__(self, label: str) -> None:
        self._label = label
        self._commands: List[IUndoCommand] = []

    def label(self) -> str:
        return self._label

    def add(self, command: IUndoCommand) -> None:
        self._commands.append(command)

    def commands(self) -> List[IUndoCommand]:
        return list(self._commands)

    def execute(self) -> None:
        for command in self._commands:
            command.execute()

    def undo(self) -> None:
        for command in reversed(self._commands):
            command.undo()

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"CommandSequence({self._label!r}, {len(self._commands)} command(s))"


class MemoryTransaction(ITransaction):
    def __init__(self, history: "MemoryUndoHistory", label: str) -> None:
        self._history = history
        self._sequence = CommandSequence(label)
        self._committed = False

    def execute(self, command: IUndoCommand) -> None:
        if self._committed:
            raise UndoSystemError("transaction already committed")
        command.execute()
        self._sequence.add(command)

    def commit(self) -> None:
        if self._committed:
            raise UndoSystemError("transaction already committed")
        if len(self._sequence):
            self._history._push(self._sequence)
        # Only a recorded sequence counts as committed; rollback() stays possible otherwise.
        self._committed = True

    def is_committed(self) -> bool:
        return self._committed

    def rollback(self) -> None:
        """Revert every command executed so far without recording them."""

        if self._committed:
            raise UndoSystemError("transaction already committed")
        self._sequence.undo()
        self._committed = True


class MemoryUndoHistory(IUndoHistory):
    """Linear undo/redo stacks of :class:`CommandSequence` entries."""

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._history_limit = history_limit
        self._undo_stack: List[CommandSequence] = []
        self._redo_stack: List[CommandSequence] = []

    def begin_transaction(self, label: str) -> MemoryTransaction:
        return MemoryTransaction(self, label)

    def last_executed_command(self) -> Optional[CommandSequence]:
        return self._undo_stack[-1] if self._undo_stack else None

    def transactions(self) -> List[CommandSequence]:
        return list(self._undo_stack)

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def undo(self) -> None:
        if not self._undo_stack:
            return
        sequence = self._undo_stack.pop()
        sequence.undo()
        self._redo_stack.append(sequence)

    def redo(self) -> None:
        if not self._redo_stack:
            return
        sequence = self._redo_stack.pop()
        sequence.execute()
        self._undo_stack.append(sequence)

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()

    def _push(self, sequence: CommandSequence) -> None:
        self._undo_stack.append(sequence)
        if len(self._undo_stack) > self._history_limit:
            self._undo_stack.pop(0)
        # New action clears the redo history.
        self._redo_stack.clear()
        _LOGGER.debug("Recorded %r", sequence)


class MemoryDocument(IPaletteDocument):
    """Document holding one committed palette per frame."""

    def __init__(
        self,
        palette: Palette,
        *,
        frame: int = 0,
        history: Optional[MemoryUndoHistory] = None,
    ) -> None:
        self._palettes: Dict[int, Palette] = {frame: palette}
        self._frame = frame
        self._history = history if history is not None else MemoryUndoHistory()

    def current_frame(self) -> int:
        return self._frame

    def set_current_frame(self, frame: int) -> None:
        if frame not in self._palettes:
            # Frames without their own palette start from the current one.
            self._palettes[frame] = self._palettes[self._frame].copy()
        self._frame = frame

    def palette(self, frame: int) -> Palette:
        try:
            return self._palettes[frame]
        except KeyError:
            raise UndoSystemError(f"frame {frame} has no palette") from None

    def undo_history(self) -> MemoryUndoHistory:
        return self._history


class MemoryDocumentContext(IDocumentContext):
    def __init__(self, document: Optional[IPaletteDocument] = None) -> None:
        self._document = document

    def active_document(self) -> Optional[IPaletteDocument]:
        return self._document

    def set_active_document(self, document: Optional[IPaletteDocument]) -> None:
        self._document = document
