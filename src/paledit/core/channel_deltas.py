"""Accumulated relative deltas keyed by colorspace and channel."""

from __future__ import annotations

from typing import Dict, Tuple

from ..domain.models import Channel, ColorSpace

_Key = Tuple[ColorSpace, Channel]


class ChannelDeltaStore:
    """Hold the running total of relative nudges since the last baseline reset."""

    def __init__(self) -> None:
        self._deltas: Dict[_Key, float] = {}

    def accumulate(self, space: ColorSpace, channel: Channel, delta: float) -> float:
        """Add *delta* to the running total of *channel* and return the new total."""

        if channel not in space.channels:
            raise ValueError(f"channel {channel.value} does not belong to {space.value}")
        key = (space, channel)
        total = self._deltas.get(key, 0.0) + float(delta)
        self._deltas[key] = total
        return total

    def get(self, space: ColorSpace, channel: Channel) -> float:
        return self._deltas.get((space, channel), 0.0)

    def deltas_for(self, space: ColorSpace) -> Dict[Channel, float]:
        """Return the total of every channel of *space*, untouched ones as ``0.0``."""

        return {channel: self.get(space, channel) for channel in space.channels}

    def clear(self) -> None:
        self._deltas.clear()

    def clear_keeping_alpha(self, previous: ColorSpace, current: ColorSpace) -> float:
        """Drop every delta except the alpha total of *previous*, re-keyed to *current*.

        Returns the alpha total that survived.
        """

        alpha = self.get(previous, Channel.ALPHA)
        self._deltas.clear()
        if alpha:
            self._deltas[(current, Channel.ALPHA)] = alpha
        return alpha

    def is_empty(self) -> bool:
        return not any(self._deltas.values())

    def snapshot(self) -> Dict[_Key, float]:
        return dict(self._deltas)
