from .models import (
    CHANNELS_BY_SPACE,
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
from .palette import Palette, PalettePicks

__all__ = [
    "CHANNELS_BY_SPACE",
    "Channel",
    "Color",
    "ColorPayload",
    "ColorSpace",
    "DeltaPayload",
    "EditMode",
    "EditPayload",
    "Hsla",
    "Hsva",
    "Palette",
    "PalettePicks",
    "Rgba",
]
