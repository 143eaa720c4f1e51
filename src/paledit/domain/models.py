from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class ColorSpace(str, Enum):
    RGB = "rgb"
    HSV = "hsv"
    HSL = "hsl"

    @property
    def channels(self) -> Tuple["Channel", ...]:
        return CHANNELS_BY_SPACE[self]


class EditMode(str, Enum):
    ABSOLUTE = "abs"
    RELATIVE = "rel"


class Channel(str, Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    ALPHA = "alpha"
    HSV_HUE = "hsv_hue"
    HSV_SATURATION = "hsv_saturation"
    HSV_VALUE = "hsv_value"
    HSL_HUE = "hsl_hue"
    HSL_SATURATION = "hsl_saturation"
    HSL_LIGHTNESS = "hsl_lightness"

    @property
    def is_hue(self) -> bool:
        return self in (Channel.HSV_HUE, Channel.HSL_HUE)

    @property
    def is_unit(self) -> bool:
        """True for channels stored in ``[0, 1]`` (saturation, value, lightness)."""
        return self in (
            Channel.HSV_SATURATION,
            Channel.HSV_VALUE,
            Channel.HSL_SATURATION,
            Channel.HSL_LIGHTNESS,
        )


# Alpha is shared by every colorspace and is always listed last.
CHANNELS_BY_SPACE = {
    ColorSpace.RGB: (Channel.RED, Channel.GREEN, Channel.BLUE, Channel.ALPHA),
    ColorSpace.HSV: (Channel.HSV_HUE, Channel.HSV_SATURATION, Channel.HSV_VALUE, Channel.ALPHA),
    ColorSpace.HSL: (Channel.HSL_HUE, Channel.HSL_SATURATION, Channel.HSL_LIGHTNESS, Channel.ALPHA),
}


@dataclass(frozen=True)
class Rgba:
    """Canonical 8-bit RGBA color."""

    r: int
    g: int
    b: int
    a: int = 255

    @property
    def space(self) -> ColorSpace:
        return ColorSpace.RGB

    def to_rgba(self) -> "Rgba":
        return self.clamped()

    def clamped(self) -> "Rgba":
        return Rgba(*(max(0, min(255, int(round(c)))) for c in (self.r, self.g, self.b, self.a)))

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


@dataclass(frozen=True)
class Hsva:
    """Hue in degrees, saturation and value in ``[0, 1]``, 8-bit alpha."""

    h: float
    s: float
    v: float
    a: int = 255

    @property
    def space(self) -> ColorSpace:
        return ColorSpace.HSV

    def to_rgba(self) -> Rgba:
        from ..core.colorspace import hsv_to_rgb

        return hsv_to_rgb(self)


@dataclass(frozen=True)
class Hsla:
    """Hue in degrees, saturation and lightness in ``[0, 1]``, 8-bit alpha."""

    h: float
    s: float
    l: float  # noqa: E741
    a: int = 255

    @property
    def space(self) -> ColorSpace:
        return ColorSpace.HSL

    def to_rgba(self) -> Rgba:
        from ..core.colorspace import hsl_to_rgb

        return hsl_to_rgb(self)


Color = Union[Rgba, Hsva, Hsla]


@dataclass(frozen=True)
class ColorPayload:
    """Absolute edit target.

    ``channel`` names the single slider that moved.  ``None`` replaces the
    whole color, as the hex entry and the eyedropper do.
    """

    color: Color
    channel: Optional[Channel] = None


@dataclass(frozen=True)
class DeltaPayload:
    """Relative increment for one channel.

    RGB and alpha deltas are 8-bit steps, hue deltas are degrees and
    saturation/value/lightness deltas are percent points.
    """

    channel: Channel
    delta: float


EditPayload = Union[ColorPayload, DeltaPayload]
