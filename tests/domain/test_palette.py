from __future__ import annotations

import numpy as np
import pytest

from paledit.domain.models import Rgba
from paledit.domain.palette import Palette, PalettePicks
from paledit.errors import PaletteIndexError


def test_new_palette_is_opaque_black():
    palette = Palette(3)
    assert list(palette) == [Rgba(0, 0, 0, 255)] * 3


def test_set_entry_clamps_channels():
    palette = Palette(1)
    palette.set_entry(0, Rgba(300, -4, 12, 999))
    assert palette.get_entry(0) == Rgba(255, 0, 12, 255)


def test_out_of_range_access_raises(four_entry_palette):
    with pytest.raises(PaletteIndexError):
        four_entry_palette.get_entry(4)
    with pytest.raises(PaletteIndexError):
        four_entry_palette.set_entry(-1, Rgba(0, 0, 0))


def test_as_array_is_read_only(four_entry_palette):
    view = four_entry_palette.as_array()
    assert view.shape == (4, 4)
    with pytest.raises(ValueError):
        view[0, 0] = 1


def test_from_array_validates_shape():
    with pytest.raises(ValueError):
        Palette.from_array(np.zeros((3, 3)))
    palette = Palette.from_array(np.array([[1, 2, 3, 4]]))
    assert palette.get_entry(0) == Rgba(1, 2, 3, 4)


def test_copy_is_independent(four_entry_palette):
    clone = four_entry_palette.copy()
    clone.set_entry(0, Rgba(1, 1, 1))
    assert four_entry_palette.get_entry(0) == Rgba(200, 140, 140, 255)
    assert clone != four_entry_palette


def test_copy_alpha_from_only_touches_alpha():
    target = Palette.from_colors([Rgba(10, 20, 30, 255)])
    source = Palette.from_colors([Rgba(90, 90, 90, 7)])
    target.copy_alpha_from(source)
    assert target.get_entry(0) == Rgba(10, 20, 30, 7)
    with pytest.raises(ValueError):
        target.copy_alpha_from(Palette(2))


def test_set_range_and_slice_are_inclusive(four_entry_palette):
    chunk = four_entry_palette.slice(1, 2)
    assert chunk.shape == (2, 4)
    target = Palette(4)
    target.set_range(1, chunk)
    assert target.get_entry(1) == four_entry_palette.get_entry(1)
    assert target.get_entry(2) == four_entry_palette.get_entry(2)
    assert target.get_entry(3) == Rgba(0, 0, 0, 255)


class TestCountDiff:
    def test_equal_palettes_yield_empty_range(self, four_entry_palette):
        first, last = four_entry_palette.count_diff(four_entry_palette.copy())
        assert first > last

    def test_range_spans_first_and_last_change(self, four_entry_palette):
        other = four_entry_palette.copy()
        other.set_entry(1, Rgba(0, 0, 0, 0))
        other.set_entry(3, Rgba(9, 9, 9))
        assert four_entry_palette.count_diff(other) == (1, 3)

    def test_alpha_difference_counts(self, four_entry_palette):
        other = four_entry_palette.copy()
        other.set_entry(2, Rgba(200, 100, 100, 254))
        assert four_entry_palette.count_diff(other) == (2, 2)

    def test_extra_entries_count_as_changed(self):
        short = Palette(2)
        long = Palette(4)
        assert short.count_diff(long) == (2, 3)


class TestPalettePicks:
    def test_explicit_selection_wins_over_cursor(self):
        picks = PalettePicks.resolve([1, 3], 0, 4)
        assert picks.indices() == [1, 3]

    def test_cursor_is_fallback(self):
        picks = PalettePicks.resolve([], 2, 4)
        assert picks.indices() == [2]
        assert picks.first() == picks.last() == 2

    def test_out_of_range_indices_are_ignored(self):
        picks = PalettePicks.resolve([-1, 9], 7, 4)
        assert picks.picks() == 0
        assert picks.first() is None
        assert not picks.is_contiguous()

    def test_contiguity(self):
        assert PalettePicks.resolve([2, 3, 4], None, 8).is_contiguous()
        assert not PalettePicks.resolve([2, 4], None, 8).is_contiguous()

    def test_equality(self):
        assert PalettePicks.resolve([1], None, 3) == PalettePicks.resolve([], 1, 3)
