"""Immutable view of the settings the palette editor consumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..config import (
    COALESCE_WINDOW_MS,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_OPERATION_LABEL,
    RESET_ALPHA_DELTA_ON_COLORSPACE_CHANGE,
)
from ..domain.models import ColorSpace, EditMode


@dataclass(frozen=True)
class EditorSettings:
    coalesce_window_ms: int = COALESCE_WINDOW_MS
    operation_label: str = DEFAULT_OPERATION_LABEL
    history_limit: int = DEFAULT_HISTORY_LIMIT
    # When False the relative alpha delta survives a colorspace switch.
    reset_alpha_delta_on_colorspace_change: bool = RESET_ALPHA_DELTA_ON_COLORSPACE_CHANGE
    # Colorspace and mode a freshly opened editor starts in.
    colorspace: ColorSpace = ColorSpace.RGB
    mode: EditMode = EditMode.ABSOLUTE

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "EditorSettings":
        """Build settings from the ``editor`` section of the settings file."""

        if not data:
            return cls()
        defaults = cls()
        return cls(
            coalesce_window_ms=int(data.get("coalesce_window_ms", defaults.coalesce_window_ms)),
            operation_label=str(data.get("operation_label", defaults.operation_label)),
            history_limit=int(data.get("history_limit", defaults.history_limit)),
            reset_alpha_delta_on_colorspace_change=bool(
                data.get(
                    "reset_alpha_delta_on_colorspace_change",
                    defaults.reset_alpha_delta_on_colorspace_change,
                )
            ),
            colorspace=ColorSpace(data.get("colorspace", defaults.colorspace.value)),
            mode=EditMode(data.get("mode", defaults.mode.value)),
        )
