"""Contracts of the collaborators the palette editor consumes.

The editor never reaches a process-wide singleton: every capability below is
handed to it at construction time.
"""

from abc import ABC, abstractmethod
from typing import Optional, Set

from .palette import Palette


class IPaletteStore(ABC):
    @abstractmethod
    def get_current_palette(self) -> Palette:
        """Return the live (system) palette that edits are written into."""
        pass


class IUndoCommand(ABC):
    """A recordable edit that knows how to apply and revert itself."""

    @abstractmethod
    def execute(self) -> None:
        pass

    @abstractmethod
    def undo(self) -> None:
        pass


class ICommandHandle(ABC):
    """Opaque handle to the most recently executed undo command."""

    @abstractmethod
    def label(self) -> str:
        pass

    @abstractmethod
    def add(self, command: IUndoCommand) -> None:
        """Append *command* so it is undone and redone together with this one."""
        pass


class ITransaction(ABC):
    @abstractmethod
    def execute(self, command: IUndoCommand) -> None:
        pass

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Revert every command executed so far; the transaction is discarded."""
        pass


class IUndoHistory(ABC):
    @abstractmethod
    def begin_transaction(self, label: str) -> ITransaction:
        pass

    @abstractmethod
    def last_executed_command(self) -> Optional[ICommandHandle]:
        pass


class IPaletteDocument(ABC):
    @abstractmethod
    def current_frame(self) -> int:
        pass

    @abstractmethod
    def palette(self, frame: int) -> Palette:
        """Return the committed palette recorded for *frame*."""
        pass

    @abstractmethod
    def undo_history(self) -> IUndoHistory:
        pass


class IDocumentContext(ABC):
    @abstractmethod
    def active_document(self) -> Optional[IPaletteDocument]:
        pass


class ISelectionSource(ABC):
    @abstractmethod
    def get_selected_indices(self) -> Set[int]:
        pass

    @abstractmethod
    def get_selected_entry(self) -> Optional[int]:
        """Return the cursor index used when nothing is explicitly selected."""
        pass


class IPaletteNotifier(ABC):
    """Fire-and-forget redraw/broadcast sinks."""

    @abstractmethod
    def notify_palette_changed(self) -> None:
        pass

    @abstractmethod
    def notify_document_redraw(self) -> None:
        pass

    @abstractmethod
    def notify_view_redraw(self) -> None:
        pass
