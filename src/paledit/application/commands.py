"""Undo commands produced by the palette editor."""

from __future__ import annotations

import numpy as np

from ..domain.collaborators import IPaletteDocument, IUndoCommand
from ..domain.palette import Palette


class SetPaletteRange(IUndoCommand):
    """Write entries ``[first, last]`` of *palette* into a document frame.

    Both the previous and the new colors of the range are captured when the
    command is built, so undo/redo never depend on the live palette.
    """

    def __init__(
        self,
        document: IPaletteDocument,
        frame: int,
        palette: Palette,
        first: int,
        last: int,
    ) -> None:
        if first > last:
            raise ValueError(f"empty palette range {first}..{last}")
        self._document = document
        self._frame = frame
        self._first = first
        self._last = last
        self._new_colors: np.ndarray = palette.slice(first, last)
        self._old_colors: np.ndarray = document.palette(frame).slice(first, last)

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def range(self) -> tuple[int, int]:
        return self._first, self._last

    def execute(self) -> None:
        self._document.palette(self._frame).set_range(self._first, self._new_colors)

    def undo(self) -> None:
        self._document.palette(self._frame).set_range(self._first, self._old_colors)

    def __repr__(self) -> str:
        return f"SetPaletteRange(frame={self._frame}, range={self._first}..{self._last})"
