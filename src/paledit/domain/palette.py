"""Indexed palette and selection mask backed by NumPy arrays."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np

from ..errors import PaletteIndexError
from .models import Rgba


class Palette:
    """Fixed-length sequence of RGBA8 entries.

    Entries live in an ``(N, 4)`` ``uint8`` array so range diffs and bulk
    copies stay vectorised.  The index of an entry is its identity.
    """

    def __init__(self, size: int = 0, entries: Optional[Iterable[Rgba]] = None) -> None:
        self._colors = np.zeros((size, 4), dtype=np.uint8)
        self._colors[:, 3] = 255
        if entries is not None:
            for index, color in enumerate(entries):
                self.set_entry(index, color)

    @classmethod
    def from_colors(cls, colors: Sequence[Rgba]) -> "Palette":
        return cls(len(colors), colors)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Palette":
        data = np.asarray(array)
        if data.ndim != 2 or data.shape[1] != 4:
            raise ValueError(f"expected an (N, 4) array, got shape {data.shape}")
        palette = cls(0)
        palette._colors = np.clip(data, 0, 255).astype(np.uint8)
        return palette

    # ------------------------------------------------------------------
    # Accessors
    def size(self) -> int:
        return int(self._colors.shape[0])

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Rgba]:
        for index in range(self.size()):
            yield self.get_entry(index)

    def get_entry(self, index: int) -> Rgba:
        self._check_index(index)
        r, g, b, a = (int(c) for c in self._colors[index])
        return Rgba(r, g, b, a)

    def as_array(self) -> np.ndarray:
        """Return a read-only view of the raw ``(N, 4)`` entries."""

        view = self._colors.view()
        view.flags.writeable = False
        return view

    # ------------------------------------------------------------------
    # Mutation helpers
    def set_entry(self, index: int, color: Rgba) -> None:
        self._check_index(index)
        self._colors[index] = color.clamped().as_tuple()

    def set_range(self, start: int, colors: np.ndarray) -> None:
        """Overwrite ``len(colors)`` entries starting at *start*."""

        count = len(colors)
        if count == 0:
            return
        self._check_index(start)
        self._check_index(start + count - 1)
        self._colors[start:start + count] = colors

    def copy_colors_to(self, dest: "Palette") -> None:
        """Replace the entries of *dest* with a copy of this palette's entries."""

        dest._colors = self._colors.copy()

    def copy_alpha_from(self, source: "Palette") -> None:
        """Overwrite only the alpha column with the one of *source*."""

        if source.size() != self.size():
            raise ValueError("palettes differ in size")
        self._colors[:, 3] = source._colors[:, 3]

    def copy(self) -> "Palette":
        clone = Palette(0)
        self.copy_colors_to(clone)
        return clone

    def slice(self, start: int, stop: int) -> np.ndarray:
        """Return a copy of entries ``[start, stop]`` (inclusive)."""

        return self._colors[start:stop + 1].copy()

    # ------------------------------------------------------------------
    def count_diff(self, other: "Palette") -> Tuple[int, int]:
        """Return the inclusive index range where *other* differs from this palette.

        Equal palettes yield ``(0, -1)`` so callers can test ``from > to``.
        Entries beyond the shorter palette count as different.
        """

        common = min(self.size(), other.size())
        changed = np.flatnonzero(np.any(self._colors[:common] != other._colors[:common], axis=1))
        longest = max(self.size(), other.size())
        if self.size() != other.size():
            tail = np.arange(common, longest)
            changed = np.concatenate([changed, tail])
        if changed.size == 0:
            return 0, -1
        return int(changed[0]), int(changed[-1])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self._colors.shape == other._colors.shape and bool(np.array_equal(self._colors, other._colors))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Palette(size={self.size()})"

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.size():
            raise PaletteIndexError(f"palette index {index} out of range 0..{self.size() - 1}")


class PalettePicks:
    """Boolean selection mask over the entries of a palette."""

    def __init__(self, size: int = 0) -> None:
        self._mask = np.zeros(size, dtype=bool)

    @classmethod
    def resolve(
        cls,
        selected: Iterable[int],
        fallback: Optional[int],
        size: int,
    ) -> "PalettePicks":
        """Build picks from an explicit selection or the cursor *fallback*.

        Out-of-range indices are ignored.  When nothing explicit remains the
        fallback index, if addressable, becomes the single implicit pick.
        """

        picks = cls(size)
        for index in selected:
            if 0 <= index < size:
                picks[index] = True
        if picks.picks() == 0 and fallback is not None and 0 <= fallback < size:
            picks[fallback] = True
        return picks

    def size(self) -> int:
        return int(self._mask.shape[0])

    def __len__(self) -> int:
        return self.size()

    def __getitem__(self, index: int) -> bool:
        return bool(self._mask[index])

    def __setitem__(self, index: int, value: bool) -> None:
        self._mask[index] = bool(value)

    def picks(self) -> int:
        return int(np.count_nonzero(self._mask))

    def indices(self) -> list[int]:
        return [int(i) for i in np.flatnonzero(self._mask)]

    def first(self) -> Optional[int]:
        found = np.flatnonzero(self._mask)
        return int(found[0]) if found.size else None

    def last(self) -> Optional[int]:
        found = np.flatnonzero(self._mask)
        return int(found[-1]) if found.size else None

    def is_contiguous(self) -> bool:
        first, last = self.first(), self.last()
        if first is None or last is None:
            return False
        return self.picks() == last - first + 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PalettePicks):
            return NotImplemented
        return bool(np.array_equal(self._mask, other._mask))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PalettePicks({self.indices()})"
