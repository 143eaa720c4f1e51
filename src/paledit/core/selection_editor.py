"""Compute new palette colors for the picked entries of an edit.

Absolute edits write the slider/hex value into the entries.  Relative edits
accumulate the increment in a :class:`ChannelDeltaStore` and rebuild every
picked entry from the baseline palette plus the running totals, so replaying
a drag from any intermediate state never compounds the deltas.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Optional

from ..config import PERCENT_DELTA_SCALE
from ..domain.models import (
    Channel,
    Color,
    ColorPayload,
    ColorSpace,
    DeltaPayload,
    EditMode,
    EditPayload,
    Hsla,
    Hsva,
    Rgba,
)
from ..domain.palette import Palette, PalettePicks
from .channel_deltas import ChannelDeltaStore
from .colorspace import (
    clamp_byte,
    clamp_unit,
    get_channel,
    rgb_to_hsl,
    rgb_to_hsv,
    to_colorspace,
    wrap_hue,
)

_LOGGER = logging.getLogger(__name__)


def with_channel(color: Color, channel: Channel, value: float) -> Color:
    """Return *color* with only *channel* replaced by *value*.

    Every channel has its own branch; setting one channel never leaks into
    another.
    """

    if channel is Channel.ALPHA:
        return replace(color, a=clamp_byte(value))

    if isinstance(color, Rgba):
        if channel is Channel.RED:
            return replace(color, r=clamp_byte(value))
        if channel is Channel.GREEN:
            return replace(color, g=clamp_byte(value))
        if channel is Channel.BLUE:
            return replace(color, b=clamp_byte(value))
    elif isinstance(color, Hsva):
        if channel is Channel.HSV_HUE:
            return replace(color, h=wrap_hue(value))
        if channel is Channel.HSV_SATURATION:
            return replace(color, s=clamp_unit(value))
        if channel is Channel.HSV_VALUE:
            return replace(color, v=clamp_unit(value))
    elif isinstance(color, Hsla):
        if channel is Channel.HSL_HUE:
            return replace(color, h=wrap_hue(value))
        if channel is Channel.HSL_SATURATION:
            return replace(color, s=clamp_unit(value))
        if channel is Channel.HSL_LIGHTNESS:
            return replace(color, l=clamp_unit(value))
    raise ValueError(f"channel {channel.value} does not belong to {color.space.value}")


def describe_picks(picks: PalettePicks) -> str:
    """Return the label shown next to the hex entry for *picks*."""

    first = picks.first()
    if first is None:
        return "No Entry"
    last = picks.last()
    if first == last:
        return f"Entry: {first}"
    if picks.is_contiguous():
        return f"Range: {first}-{last}"
    return "Multiple Entries"


class SelectionEditor:
    """Turn an edit payload into a ``{index: Rgba}`` mapping for the picks."""

    def __init__(
        self,
        deltas: Optional[ChannelDeltaStore] = None,
        *,
        percent_scale: float = PERCENT_DELTA_SCALE,
    ) -> None:
        self._deltas = deltas if deltas is not None else ChannelDeltaStore()
        self._percent_scale = float(percent_scale)

    @property
    def deltas(self) -> ChannelDeltaStore:
        return self._deltas

    def reset(self) -> None:
        """Forget every accumulated relative delta."""

        self._deltas.clear()

    # ------------------------------------------------------------------
    def apply_edit(
        self,
        picks: PalettePicks,
        colorspace: ColorSpace,
        mode: EditMode,
        payload: EditPayload,
        *,
        live: Palette,
        baseline: Optional[Palette] = None,
    ) -> Dict[int, Rgba]:
        """Return the new color of every picked index.

        *live* supplies the current entries for absolute single-channel edits;
        *baseline* is the frozen snapshot relative edits are computed from.
        Empty picks produce an empty mapping.
        """

        indices = picks.indices()
        if not indices:
            return {}

        if mode is EditMode.ABSOLUTE:
            if not isinstance(payload, ColorPayload):
                raise TypeError("absolute edits expect a ColorPayload")
            return self._apply_absolute(indices, colorspace, payload, live)

        if not isinstance(payload, DeltaPayload):
            raise TypeError("relative edits expect a DeltaPayload")
        if baseline is None:
            raise ValueError("relative edits need a baseline palette")
        return self._apply_relative(indices, colorspace, payload, baseline)

    # ------------------------------------------------------------------
    # Absolute mode
    def _apply_absolute(
        self,
        indices: list[int],
        colorspace: ColorSpace,
        payload: ColorPayload,
        live: Palette,
    ) -> Dict[int, Rgba]:
        target = to_colorspace(payload.color, colorspace)

        # One entry, or a whole-color payload: every channel comes from the payload.
        if len(indices) == 1 or payload.channel is None:
            replacement = target.to_rgba()
            return {index: replacement for index in indices}

        channel = payload.channel
        if channel not in colorspace.channels:
            raise ValueError(f"channel {channel.value} does not belong to {colorspace.value}")
        value = get_channel(target, channel)

        edited: Dict[int, Rgba] = {}
        for index in indices:
            own = to_colorspace(live.get_entry(index), colorspace)
            edited[index] = with_channel(own, channel, value).to_rgba()
        return edited

    # ------------------------------------------------------------------
    # Relative mode
    def _apply_relative(
        self,
        indices: list[int],
        colorspace: ColorSpace,
        payload: DeltaPayload,
        baseline: Palette,
    ) -> Dict[int, Rgba]:
        self._deltas.accumulate(colorspace, payload.channel, payload.delta)
        totals = self._deltas.deltas_for(colorspace)
        _LOGGER.debug("Relative %s totals: %s", colorspace.value, totals)

        return {
            index: self._shift(baseline.get_entry(index), colorspace, totals)
            for index in indices
        }

    def _shift(self, base: Rgba, colorspace: ColorSpace, totals: Dict[Channel, float]) -> Rgba:
        alpha = clamp_byte(base.a + totals[Channel.ALPHA])
        scale = self._percent_scale

        if colorspace is ColorSpace.RGB:
            return Rgba(
                clamp_byte(base.r + totals[Channel.RED]),
                clamp_byte(base.g + totals[Channel.GREEN]),
                clamp_byte(base.b + totals[Channel.BLUE]),
                alpha,
            )
        if colorspace is ColorSpace.HSV:
            hsv = rgb_to_hsv(base)
            return Hsva(
                wrap_hue(hsv.h + totals[Channel.HSV_HUE]),
                clamp_unit(hsv.s + totals[Channel.HSV_SATURATION] / scale),
                clamp_unit(hsv.v + totals[Channel.HSV_VALUE] / scale),
                alpha,
            ).to_rgba()
        hsl = rgb_to_hsl(base)
        return Hsla(
            wrap_hue(hsl.h + totals[Channel.HSL_HUE]),
            clamp_unit(hsl.s + totals[Channel.HSL_SATURATION] / scale),
            clamp_unit(hsl.l + totals[Channel.HSL_LIGHTNESS] / scale),
            alpha,
        ).to_rgba()
