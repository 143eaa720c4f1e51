"""RGB8 / HSV / HSL conversion helpers.

These functions are the only place where colors change representation.
Hue is expressed in degrees ``[0, 360)``, saturation/value/lightness in
``[0, 1]`` and every channel of an :class:`Rgba` in ``[0, 255]``.

Conventions
-----------
* Hue is ``0`` whenever the color is achromatic (saturation ``0``), in both
  directions.
* Out-of-range inputs are normalised before converting: hue wraps, unit
  channels and alpha clamp.  NaN and infinite hues count as ``0``; NaN unit
  channels and alpha count as ``0`` too, so no input raises.
* Outputs are rounded to the nearest integer and clamped, which makes
  ``RGB -> HSV/HSL -> RGB`` exact for all 8-bit triples.
"""

from __future__ import annotations

import math

from ..domain.models import Channel, Color, ColorSpace, Hsla, Hsva, Rgba


def wrap_hue(hue: float) -> float:
    """Wrap *hue* into ``[0, 360)``."""

    hue = float(hue)
    if not math.isfinite(hue):
        return 0.0
    wrapped = hue % 360.0
    # ``-1e-20 % 360.0`` rounds up to exactly 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def clamp_unit(value: float) -> float:
    value = float(value)
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def clamp_byte(value: float) -> int:
    value = float(value)
    if math.isnan(value):
        return 0
    return int(round(max(0.0, min(255.0, value))))


def _to_byte(unit: float) -> int:
    return clamp_byte(unit * 255.0)


def _hue_of(r: int, g: int, b: int, maximum: int, delta: int) -> float:
    """Return the hue in degrees shared by HSV and HSL."""

    if delta == 0:
        return 0.0
    if maximum == r:
        sector = ((g - b) / delta) % 6.0
    elif maximum == g:
        sector = (b - r) / delta + 2.0
    else:
        sector = (r - g) / delta + 4.0
    return wrap_hue(sector * 60.0)


# ---------------------------------------------------------------------------
# HSV
# ---------------------------------------------------------------------------

def rgb_to_hsv(color: Rgba) -> Hsva:
    c = color.clamped()
    maximum = max(c.r, c.g, c.b)
    minimum = min(c.r, c.g, c.b)
    delta = maximum - minimum
    saturation = delta / maximum if maximum > 0 else 0.0
    return Hsva(_hue_of(c.r, c.g, c.b, maximum, delta), saturation, maximum / 255.0, c.a)


def hsv_to_rgb(color: Hsva) -> Rgba:
    hue = wrap_hue(color.h)
    s = clamp_unit(color.s)
    v = clamp_unit(color.v)
    alpha = clamp_byte(color.a)

    if s == 0.0:
        grey = _to_byte(v)
        return Rgba(grey, grey, grey, alpha)

    sector = hue / 60.0
    base = math.floor(sector)
    f = sector - base
    p = v * (1.0 - s)
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))

    index = int(base) % 6
    if index == 0:
        r, g, b = v, t, p
    elif index == 1:
        r, g, b = q, v, p
    elif index == 2:
        r, g, b = p, v, t
    elif index == 3:
        r, g, b = p, q, v
    elif index == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q
    return Rgba(_to_byte(r), _to_byte(g), _to_byte(b), alpha)


# ---------------------------------------------------------------------------
# HSL
# ---------------------------------------------------------------------------

def rgb_to_hsl(color: Rgba) -> Hsla:
    c = color.clamped()
    maximum = max(c.r, c.g, c.b)
    minimum = min(c.r, c.g, c.b)
    delta = maximum - minimum
    lightness = (maximum + minimum) / 510.0
    if delta == 0:
        saturation = 0.0
    else:
        saturation = clamp_unit((delta / 255.0) / (1.0 - abs(2.0 * lightness - 1.0)))
    return Hsla(_hue_of(c.r, c.g, c.b, maximum, delta), saturation, lightness, c.a)


def hsl_to_rgb(color: Hsla) -> Rgba:
    hue = wrap_hue(color.h)
    s = clamp_unit(color.s)
    lightness = clamp_unit(color.l)
    alpha = clamp_byte(color.a)

    if s == 0.0:
        grey = _to_byte(lightness)
        return Rgba(grey, grey, grey, alpha)

    chroma = (1.0 - abs(2.0 * lightness - 1.0)) * s
    sector = hue / 60.0
    x = chroma * (1.0 - abs(sector % 2.0 - 1.0))
    m = lightness - chroma / 2.0

    index = int(math.floor(sector)) % 6
    if index == 0:
        r, g, b = chroma, x, 0.0
    elif index == 1:
        r, g, b = x, chroma, 0.0
    elif index == 2:
        r, g, b = 0.0, chroma, x
    elif index == 3:
        r, g, b = 0.0, x, chroma
    elif index == 4:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x
    return Rgba(_to_byte(r + m), _to_byte(g + m), _to_byte(b + m), alpha)


# ---------------------------------------------------------------------------
# Dispatch helpers
# ---------------------------------------------------------------------------

def to_colorspace(color: Color, space: ColorSpace) -> Color:
    """Express *color* in *space*, going through canonical RGBA."""

    if color.space is space:
        return color
    rgba = from_colorspace(color)
    if space is ColorSpace.HSV:
        return rgb_to_hsv(rgba)
    if space is ColorSpace.HSL:
        return rgb_to_hsl(rgba)
    return rgba


def from_colorspace(color: Color) -> Rgba:
    """Return the canonical :class:`Rgba` of *color*, whatever its space."""

    if isinstance(color, Hsva):
        return hsv_to_rgb(color)
    if isinstance(color, Hsla):
        return hsl_to_rgb(color)
    return color.clamped()


def get_channel(color: Color, channel: Channel) -> float:
    """Read *channel* from *color*, which must already be in the channel's space."""

    if channel is Channel.ALPHA:
        return color.a
    if isinstance(color, Rgba):
        if channel is Channel.RED:
            return color.r
        if channel is Channel.GREEN:
            return color.g
        if channel is Channel.BLUE:
            return color.b
    elif isinstance(color, Hsva):
        if channel is Channel.HSV_HUE:
            return color.h
        if channel is Channel.HSV_SATURATION:
            return color.s
        if channel is Channel.HSV_VALUE:
            return color.v
    elif isinstance(color, Hsla):
        if channel is Channel.HSL_HUE:
            return color.h
        if channel is Channel.HSL_SATURATION:
            return color.s
        if channel is Channel.HSL_LIGHTNESS:
            return color.l
    raise ValueError(f"channel {channel.value} does not belong to {color.space.value}")
